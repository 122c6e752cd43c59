"""Skip rules and path normalization for request logging.

Paths are normalized before they are matched, so skip lists and log
aggregation keys see route templates instead of literal ids:

    /orders/17?expand=items  with  order_id=17
    → /orders/:order_id?expand=items
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def normalize_path(path: str, path_params: Mapping[str, Any] | None = None, query: str = "") -> str:
    """Replace route parameter values with ``:name`` placeholders.

    Only the first occurrence of each value is replaced, anywhere in the
    path: /v1/items/1 with item_id=1 becomes /v:item_id/items/1. Substitution
    happens before the raw query string is appended.
    """
    for name, value in (path_params or {}).items():
        value = str(value)
        if value:
            path = path.replace(value, f":{name}", 1)
    if query:
        path = f"{path}?{query}"
    return path


def compile_pattern(pattern: "str | re.Pattern[str] | None") -> "re.Pattern[str] | None":
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    if not pattern:
        return None
    return re.compile(pattern)


@dataclass(frozen=True)
class SkipRules:
    """Exclusions checked against each request, in order: method, exact path, pattern."""

    methods: frozenset[str] = frozenset()
    paths: frozenset[str] = frozenset()
    pattern: "re.Pattern[str] | None" = None

    def should_skip(self, method: str, path: str) -> bool:
        if method.upper() in self.methods:
            return True
        if path in self.paths:
            return True
        return self.pattern is not None and self.pattern.search(path) is not None
