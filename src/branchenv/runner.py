# runner.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from .classify import classify_branch
from .github.core import export_variable, input_reader
from .model import Settings
from .parser import parse_variables
from .resolver import resolve_value
from .ui.console import Console, get_console

Exporter = Callable[[str, str], None]


@dataclass
class RunResult:
    """What a run did, in order. Used by the CLI and by tests."""
    branch_key: Optional[str] = None
    exported: Dict[str, str] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)
    failed: bool = False


# ----------------------------------------------------------------------
# Export decision
# ----------------------------------------------------------------------

def _should_skip(name: str, env: Mapping[str, str], settings: Settings) -> bool:
    return not settings.overwrite and bool(env.get(name))


def _export(
    name: str,
    value: Optional[str],
    settings: Settings,
    exporter: Exporter,
    reporter: Console,
    result: RunResult,
) -> None:
    if value:
        exporter(name, value)
        reporter.debug(f"Exporting {name} with value {value}")
        result.exported[name] = value
    elif settings.set_empty_vars:
        exporter(name, "")
        reporter.debug(f"Exporting {name} with an empty value")
        result.exported[name] = ""


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def run(
    env: Mapping[str, str],
    *,
    get_input: Callable[[str], str] | None = None,
    reporter: Console | None = None,
    exporter: Exporter | None = None,
) -> RunResult:
    """
    Resolve and export every configured variable for the ref in env.

    Never raises: any failure is reported through reporter.set_failed and
    reflected in RunResult.failed. Variables exported before a failure stay
    exported.
    """
    reporter = reporter or get_console()
    exporter = exporter or export_variable
    get_input = get_input or input_reader(env)
    result = RunResult()

    try:
        settings = Settings.from_inputs(get_input)

        # head ref (what we're building) and base ref (set only on PRs)
        ref = env.get("GITHUB_REF")
        base_ref = env.get("GITHUB_BASE_REF")

        classification = classify_branch(ref, base_ref, settings, reporter)
        if not classification.ok:
            reporter.set_failed(classification.error)
            result.failed = True
            return result

        branch_key = classification.branch_key
        result.branch_key = branch_key

        for spec in parse_variables(env):
            if _should_skip(spec.name, env, settings):
                result.skipped.append(spec.name)
                continue

            value = resolve_value(branch_key, spec.patterns)
            _export(spec.name, value, settings, exporter, reporter, result)

    except Exception as e:
        reporter.set_failed(e)
        result.failed = True

    return result


def preview(
    env: Mapping[str, str],
    settings: Settings,
    reporter: Console | None = None,
) -> Tuple[Optional[str], List[Tuple[str, Optional[str]]]]:
    """
    Dry run: classify env's ref and resolve every variable without exporting.

    Returns (branch_key, [(name, value), ...]); branch_key is None when the
    ref could not be classified. Parse errors propagate.
    """
    reporter = reporter or get_console()
    classification = classify_branch(
        env.get("GITHUB_REF"), env.get("GITHUB_BASE_REF"), settings, reporter
    )
    if not classification.ok:
        reporter.set_failed(classification.error)
        return None, []

    branch_key = classification.branch_key
    return branch_key, [
        (spec.name, resolve_value(branch_key, spec.patterns))
        for spec in parse_variables(env)
    ]
