"""
PATH CLASSIFIER
===============
Maps request paths onto guarded areas.
"""

# FLOW:
# - Middleware calls classify() with the request path.
# - Only paths that classify to an AreaTag reach AccessGate.
# HOW:
# - Servlet-style patterns: "/prefix/*" matches the prefix and everything
#   below it, anything else is an exact, case-sensitive match.

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional


class AreaTag(str, Enum):
    CUSTOMER_AREA = "customer-area"


CUSTOMER_AREA_PATTERNS = ("/customer/*", "/shoppingCart", "/WishlistController")


def _matches(pattern: str, path: str) -> bool:
    if pattern.endswith("/*"):
        prefix = pattern[:-2]
        return path == prefix or path.startswith(prefix + "/")
    return path == pattern


def strip_context_path(path: str, context_path: str) -> str:
    if context_path and (path == context_path or path.startswith(context_path + "/")):
        return path[len(context_path):] or "/"
    return path


class PathClassifier:
    def __init__(self, patterns: Optional[dict[AreaTag, Iterable[str]]] = None):
        if patterns is None:
            patterns = {AreaTag.CUSTOMER_AREA: CUSTOMER_AREA_PATTERNS}
        self.patterns = {area: tuple(items) for area, items in patterns.items()}

    def classify(self, path: str, context_path: str = "") -> Optional[AreaTag]:
        """Return the guarded area for path, or None when it is not guarded."""
        path = strip_context_path(path or "", context_path)
        for area, patterns in self.patterns.items():
            if any(_matches(pattern, path) for pattern in patterns):
                return area
        return None
