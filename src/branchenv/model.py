# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional


# ---------------------------------------------------------------------
# Reserved pattern keys
# ---------------------------------------------------------------------

DEFAULT_KEY = "!default"
TAG_KEY = "!tag"
PR_KEY = "!pr"
PR_PREFIX = "!pr>"

# Action inputs arrive as INPUT_<NAME>. These ones configure behavior,
# everything else with the prefix is a variable to resolve.
INPUT_PREFIX = "INPUT_"
PROTECTED_INPUTS = (
    "INPUT_BEVOVERWRITE",
    "INPUT_BEVACTIONONNOREF",
    "INPUT_BEVSETEMPTYVARS",
    "INPUT_BRANCHNAME",
)

NO_REF_ACTIONS = ("error", "warn", "continue")


@dataclass(frozen=True)
class Settings:
    """
    Per-run behavior switches, read once from the action inputs.

    overwrite:      replace variables that already have a value in the env
    no_ref_action:  what to do when GITHUB_REF is missing (error|warn|continue)
    set_empty_vars: export "" for variables that resolve to nothing
    branch_name:    branch key used when building a branch (refs/heads/...)
    """
    overwrite: bool = False
    no_ref_action: str = "warn"
    set_empty_vars: bool = False
    branch_name: str = ""

    @classmethod
    def from_inputs(cls, get_input: Callable[[str], str]) -> Settings:
        return cls(
            overwrite=get_input("bevOverwrite") == "true",
            no_ref_action=get_input("bevActionOnNoRef"),
            set_empty_vars=get_input("bevSetEmptyVars") == "true",
            branch_name=get_input("branchname"),
        )


@dataclass(frozen=True)
class VariableSpec:
    """One variable to export: its final name and its pattern -> value map."""
    name: str
    patterns: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Classification:
    """
    Outcome of turning a ref into a branch key.

    Exactly one of branch_key / error is set. A failed classification means
    the run must stop before touching any variable.
    """
    branch_key: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, branch_key: str) -> Classification:
        return cls(branch_key=branch_key)

    @classmethod
    def failure(cls, message: str) -> Classification:
        return cls(error=message)
