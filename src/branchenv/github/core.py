# github/core.py
# Thin layer over the GitHub Actions runner conventions: how inputs reach the
# process and how a step exports variables to the steps after it.

from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import Callable, Mapping, MutableMapping, Optional

from ..errors import BranchEnvError
from ..ui.console import Console, get_console


def input_env_name(name: str) -> str:
    """bevOverwrite -> INPUT_BEVOVERWRITE, "my input" -> INPUT_MY_INPUT"""
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(name: str, env: Optional[Mapping[str, str]] = None) -> str:
    """
    Read an action input the way the runner passes it: as an INPUT_* env var.
    Missing inputs read as "". Values are trimmed.
    """
    source = os.environ if env is None else env
    return (source.get(input_env_name(name)) or "").strip()


def input_reader(env: Mapping[str, str]) -> Callable[[str], str]:
    """Bind get_input to a fixed environment snapshot."""
    return lambda name: get_input(name, env)


def _file_command_block(name: str, value: str) -> str:
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name:
        raise BranchEnvError(
            kind="export_error",
            message=f"Unexpected input: name should not contain the delimiter {delimiter}",
            details={"name": name},
        )
    if delimiter in value:
        raise BranchEnvError(
            kind="export_error",
            message=f"Unexpected input: value should not contain the delimiter {delimiter}",
            details={"name": name},
        )
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def export_variable(
    name: str,
    value: str,
    *,
    environ: Optional[MutableMapping[str, str]] = None,
    console: Console | None = None,
) -> None:
    """
    Make name=value visible to this process and to later steps of the job.

    With GITHUB_ENV set (every modern runner) the variable is appended to
    that file as a heredoc block; otherwise the legacy ::set-env:: command
    is printed.
    """
    environ = os.environ if environ is None else environ
    environ[name] = value

    env_file = environ.get("GITHUB_ENV")
    if env_file:
        path = Path(env_file)
        if not path.exists():
            raise BranchEnvError(
                kind="export_error",
                message=f"Missing file at path: {env_file}",
                details={"name": name},
            )
        with path.open("a", encoding="utf-8") as f:
            f.write(_file_command_block(name, value))
        return

    (console or get_console()).command("set-env", value, name=name)
