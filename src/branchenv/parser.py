# parser.py
from __future__ import annotations

from typing import Dict, List, Mapping

from .errors import ParseError
from .model import DEFAULT_KEY, INPUT_PREFIX, PROTECTED_INPUTS, VariableSpec


# ---------------------------------------------------------------------
# Block syntax
# ---------------------------------------------------------------------
# A variable given as a single line applies to every branch:
#
#   API_URL: https://api.example.com
#
# A multi-line value is a block of pattern:value pairs:
#
#   API_URL: |
#     master:https://api.example.com
#     staging/*:https://staging.example.com
#     # comments and blank lines are ignored
#     !pr:https://preview.example.com
#     !tag:https://release.example.com
#     !default:http://localhost:8000
#
# The pattern is everything before the first colon (trimmed); the value is
# everything after it, kept verbatim.
# ---------------------------------------------------------------------


def _is_skipped(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def parse_pattern_block(variable: str, value: str) -> Dict[str, str]:
    """
    Fold a multi-line block into a pattern -> value map.

    Lines are applied in order, so a pattern that appears twice keeps the
    value from its last line.
    """
    patterns: Dict[str, str] = {}
    for line in value.split("\n"):
        if _is_skipped(line):
            continue

        pattern, sep, line_value = line.partition(":")
        if not sep:
            raise ParseError(variable, line)

        patterns[pattern.strip()] = line_value

    return patterns


def is_variable_input(name: str) -> bool:
    return name.startswith(INPUT_PREFIX) and name not in PROTECTED_INPUTS


def variable_name(input_name: str) -> str:
    """INPUT_api_url -> API_URL"""
    return input_name[len(INPUT_PREFIX):].upper()


def parse_variables(raw_vars: Mapping[str, str]) -> List[VariableSpec]:
    """
    Build a VariableSpec for every action input that is not a setting.

    Order follows raw_vars. Inputs that map to the same name after
    upper-casing are all returned, so whichever comes last is exported last.
    """
    specs: List[VariableSpec] = []
    for input_name, value in raw_vars.items():
        if not is_variable_input(input_name):
            continue

        name = variable_name(input_name)
        if "\n" not in value:
            patterns = {DEFAULT_KEY: value.strip()}
        else:
            patterns = parse_pattern_block(name, value)

        specs.append(VariableSpec(name=name, patterns=patterns))

    return specs
