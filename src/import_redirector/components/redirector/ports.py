"""
Redirector component port definitions.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol


class ModuleSourcePort(Protocol):
    """Source of (import_path, repo_path) pairs."""

    def iter_pairs(self) -> Iterable[tuple[str, str]]:
        """Yield configured pairs in registration order."""
        ...
