import io

import pytest

from branchenv.ui.console import Console, set_console


@pytest.fixture
def console():
    """A Console writing to an in-memory buffer, installed as the global one."""
    c = Console(stream=io.StringIO())
    set_console(c)
    yield c
    set_console(None)


@pytest.fixture
def output(console):
    return lambda: console.stream.getvalue()
