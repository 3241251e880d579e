# git.py
# Small wrapper around the Git CLI, used to guess the ref being built when
# previewing outside of a CI runner.

from __future__ import annotations

import subprocess
from typing import Optional


def _git(args: list[str], cwd: Optional[str] = None) -> str:
    """
    Execute a git command and return its stdout as a clean string.

    Args:
        args: List of git arguments (e.g. ["symbolic-ref", "HEAD"])
        cwd: Optional working directory in which to run the git command.

    Returns:
        Stdout from the git command with surrounding whitespace removed.

    Raises:
        subprocess.CalledProcessError: git exited non-zero
        FileNotFoundError: git is not installed
    """
    out = subprocess.check_output(
        ["git", *args],
        cwd=cwd,
        text=True,
        stderr=subprocess.DEVNULL,
    )
    return out.strip()


def current_ref(cwd: Optional[str] = None) -> str:
    """
    Return the fully qualified ref for HEAD, shaped like GITHUB_REF.

    - on a branch: refs/heads/<branch>
    - detached on a tagged commit: refs/tags/<tag>
    - otherwise: "" (no ref, like a detached checkout in CI)
    """
    try:
        return _git(["symbolic-ref", "-q", "HEAD"], cwd=cwd)
    except subprocess.CalledProcessError:
        pass

    try:
        tag = _git(["describe", "--tags", "--exact-match", "HEAD"], cwd=cwd)
    except subprocess.CalledProcessError:
        return ""
    return f"refs/tags/{tag}"


def current_branch(cwd: Optional[str] = None) -> str:
    """Return the short branch name for HEAD, or "" when detached."""
    try:
        return _git(["symbolic-ref", "-q", "--short", "HEAD"], cwd=cwd)
    except subprocess.CalledProcessError:
        return ""
