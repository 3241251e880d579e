import pytest

from branchenv.errors import BranchEnvError
from branchenv.github.core import export_variable, get_input, input_env_name, input_reader


def test_input_env_name():
    assert input_env_name("bevOverwrite") == "INPUT_BEVOVERWRITE"
    assert input_env_name("my input") == "INPUT_MY_INPUT"


def test_get_input_trims_and_defaults():
    env = {"INPUT_BRANCHNAME": "  main \n"}
    assert get_input("branchname", env) == "main"
    assert get_input("missing", env) == ""


def test_get_input_reads_process_env(monkeypatch):
    monkeypatch.setenv("INPUT_BEVSETEMPTYVARS", "true")
    assert get_input("bevSetEmptyVars") == "true"


def test_input_reader_binds_env():
    read = input_reader({"INPUT_BEVACTIONONNOREF": "error"})
    assert read("bevActionOnNoRef") == "error"


def test_export_writes_github_env_file(tmp_path):
    env_file = tmp_path / "github_env"
    env_file.touch()
    environ = {"GITHUB_ENV": str(env_file)}

    export_variable("FOO", "line one\nline two", environ=environ)

    assert environ["FOO"] == "line one\nline two"
    lines = env_file.read_text().splitlines()
    assert lines[0].startswith("FOO<<ghadelimiter_")
    delimiter = lines[0].split("<<", 1)[1]
    assert lines[1:] == ["line one", "line two", delimiter]


def test_export_appends(tmp_path):
    env_file = tmp_path / "github_env"
    env_file.write_text("EXISTING=1\n")
    environ = {"GITHUB_ENV": str(env_file)}

    export_variable("A", "1", environ=environ)
    export_variable("B", "", environ=environ)

    text = env_file.read_text()
    assert text.startswith("EXISTING=1\nA<<")
    assert "\nB<<" in text


def test_export_missing_env_file(tmp_path):
    environ = {"GITHUB_ENV": str(tmp_path / "nope")}
    with pytest.raises(BranchEnvError) as excinfo:
        export_variable("FOO", "x", environ=environ)
    assert excinfo.value.kind == "export_error"


def test_export_without_env_file_prints_set_env(console, output):
    environ = {}
    export_variable("FOO", "a,b\nc", environ=environ)
    assert environ["FOO"] == "a,b\nc"
    assert output() == "::set-env name=FOO::a,b%0Ac\n"
