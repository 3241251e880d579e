# classify.py
# Turns the ref being built into the branch key every variable is resolved
# against.
from __future__ import annotations

from typing import Optional, Tuple

from .model import DEFAULT_KEY, PR_PREFIX, TAG_KEY, Classification, Settings
from .ui.console import Console, get_console

NO_REF_MESSAGE = "Unable to get github.ref/GITHUB_REF"


def split_ref(ref: str) -> Tuple[str, str]:
    """
    Split a ref into (namespace, name).

        refs/heads/feature/x -> ("heads", "feature/x")
        refs/tags/v1.0.0     -> ("tags", "v1.0.0")
        main                 -> ("main", "")
    """
    if ref.startswith("refs/"):
        ref = ref[len("refs/"):]
    ref_type, _, name = ref.partition("/")
    return ref_type, name


def classify_branch(
    ref: Optional[str],
    base_ref: Optional[str],
    settings: Settings,
    reporter: Console | None = None,
) -> Classification:
    """
    Determine the branch key to match variable patterns against.

    - a base ref means a pull request: "!pr>{base_ref}"
    - refs/heads/*: the configured branch name (settings.branch_name)
    - refs/tags/*: "!tag"
    - anything else: "!default"

    A missing ref is handled according to settings.no_ref_action. The
    "error" action and unknown actions produce a failed Classification;
    nothing is raised.
    """
    reporter = reporter or get_console()

    if not ref:
        action = settings.no_ref_action
        if action == "error":
            return Classification.failure(NO_REF_MESSAGE)
        if action == "warn":
            reporter.warning(NO_REF_MESSAGE)
        elif action != "continue":
            return Classification.failure(f"Invalid value for bevActionOnNoRef: {action}")
        ref = ""

    if base_ref:
        return Classification.success(f"{PR_PREFIX}{base_ref}")

    ref_type, _name = split_ref(ref)

    # The branch name comes from the `branchname` input, not from the ref.
    if ref_type == "heads":
        return Classification.success(settings.branch_name)
    if ref_type == "tags":
        return Classification.success(TAG_KEY)
    return Classification.success(DEFAULT_KEY)
