# resolver.py
from __future__ import annotations

import re
from typing import Mapping, Optional

from .model import DEFAULT_KEY, PR_KEY


def wildcard_regex(pattern: str) -> re.Pattern[str]:
    """
    Compile a branch pattern. `*` and `**` both match any run of characters
    (including "/" and the empty string); everything else is literal.
    """
    parts = re.split(r"\*+", pattern)
    return re.compile(".*".join(re.escape(p) for p in parts))


def match_wildcard(branch_key: str, patterns: Mapping[str, str]) -> Optional[str]:
    """
    Return the first wildcard pattern (in map order) found anywhere in
    branch_key, or None. Matching is a search, not a full match:
    "staging/*" matches "staging/42" and also "old-staging/42".
    """
    for pattern in patterns:
        if "*" in pattern and wildcard_regex(pattern).search(branch_key):
            return pattern
    return None


def resolve_value(branch_key: str, patterns: Mapping[str, str]) -> Optional[str]:
    """
    Pick the value for branch_key.

    Lookup order:
      1. exact pattern, else first matching wildcard pattern
      2. for pull requests ("!pr..." keys): "!pr"
      3. "!default"
    A pattern with an empty value counts as unset and falls through to the
    next step. Returns None when nothing applies.
    """
    key = branch_key
    if not patterns.get(branch_key):
        key = match_wildcard(branch_key, patterns) or branch_key

    if patterns.get(key):
        return patterns[key]
    if key.startswith(PR_KEY) and patterns.get(PR_KEY):
        return patterns[PR_KEY]
    return patterns.get(DEFAULT_KEY)
