import pytest
from click.testing import CliRunner

from branchenv import cli as cli_module
from branchenv.cli import cli, parse_var_option
from branchenv.ui.console import set_console


@pytest.fixture
def action_env(monkeypatch, tmp_path):
    """A clean GitHub Actions-like environment writing to a temp GITHUB_ENV."""
    env_file = tmp_path / "github_env"
    env_file.touch()
    # set-then-delete so exports made during the test are undone afterwards
    for name in ("GITHUB_REF", "GITHUB_BASE_REF", "FOO"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("GITHUB_ENV", str(env_file))
    monkeypatch.setenv("INPUT_BEVACTIONONNOREF", "warn")
    yield env_file
    set_console(None)


def test_run_exports_to_github_env(action_env, monkeypatch):
    monkeypatch.setenv("GITHUB_REF", "refs/tags/v1.0.0")
    monkeypatch.setenv("INPUT_FOO", "!tag:release\n!default:dev")

    result = CliRunner().invoke(cli, ["run"])

    assert result.exit_code == 0, result.output
    assert "Branch key: !tag" in result.output
    text = action_env.read_text()
    assert text.startswith("FOO<<ghadelimiter_")
    assert "\nrelease\n" in text


def test_run_fails_on_missing_ref_with_error_policy(action_env, monkeypatch):
    monkeypatch.setenv("INPUT_BEVACTIONONNOREF", "error")
    monkeypatch.setenv("INPUT_FOO", "x")

    result = CliRunner().invoke(cli, ["run"])

    assert result.exit_code == 1
    assert "::error::Unable to get github.ref/GITHUB_REF" in result.output
    assert action_env.read_text() == ""


def test_run_fails_on_parse_error(action_env, monkeypatch):
    monkeypatch.setenv("GITHUB_REF", "refs/heads/main")
    monkeypatch.setenv("INPUT_FOO", "main:1\nbadline")

    result = CliRunner().invoke(cli, ["run"])

    assert result.exit_code == 1
    assert "does not contain a colon" in result.output


def test_preview_prints_resolved_values(action_env, tmp_path):
    block = tmp_path / "api_url.txt"
    block.write_text("staging/*:https://staging\n!default:http://localhost\n")

    result = CliRunner().invoke(
        cli,
        [
            "preview",
            "--ref", "refs/heads/staging/42",
            "--branch-name", "staging/42",
            "--var", f"API_URL=@{block}",
            "--var", "LEVEL=info",
            "--var", "ONLY_MAIN=main:1\n!tag:2",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Branch key: staging/42" in result.output
    assert "  API_URL=https://staging" in result.output
    assert "  LEVEL=info" in result.output
    assert "  ONLY_MAIN (no match)" in result.output
    assert action_env.read_text() == ""


def test_preview_defaults_from_git(action_env, monkeypatch):
    monkeypatch.setattr(cli_module, "current_ref", lambda: "refs/heads/dev")
    monkeypatch.setattr(cli_module, "current_branch", lambda: "dev")

    result = CliRunner().invoke(cli, ["preview", "--var", "FOO=dev:D\n!default:X"])

    assert result.exit_code == 0, result.output
    assert "Branch key: dev" in result.output
    assert "  FOO=D" in result.output


def test_preview_pull_request(action_env):
    result = CliRunner().invoke(
        cli,
        ["preview", "--ref", "refs/pull/1/merge", "--base-ref", "main", "--var", "FOO=!pr>main:M\n!pr:P"],
    )
    assert "Branch key: !pr>main" in result.output
    assert "  FOO=M" in result.output


def test_preview_parse_error_exits_1(action_env):
    result = CliRunner().invoke(cli, ["preview", "--ref", "refs/tags/x", "--var", "FOO=a:1\nbroken"])
    assert result.exit_code == 1


def test_parse_var_option():
    assert parse_var_option("A=b=c") == ("A", "b=c")
    with pytest.raises(Exception):
        parse_var_option("novalue")
