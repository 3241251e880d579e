from .classify import classify_branch, split_ref
from .errors import BranchEnvError, ParseError
from .model import Classification, Settings, VariableSpec
from .parser import parse_variables
from .resolver import resolve_value
from .runner import RunResult, preview, run

__all__ = [
    "classify_branch",
    "split_ref",
    "parse_variables",
    "resolve_value",
    "run",
    "preview",
    "RunResult",
    "Settings",
    "VariableSpec",
    "Classification",
    "BranchEnvError",
    "ParseError",
]
