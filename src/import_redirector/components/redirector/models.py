"""
Redirector component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._impl import RuleRegistry

# --- Validation Error ---


@dataclass(frozen=True)
class RuleValidationError:
    """Rule validation error."""

    code: str
    message: str
    field: str | None = None


class RuleConfigurationError(ValueError):
    """Raised when an import/repo pair cannot be registered."""

    def __init__(self, errors: list[RuleValidationError]) -> None:
        self.errors = errors
        super().__init__("; ".join(e.message for e in errors))


# --- Rule Model ---


@dataclass(frozen=True)
class Rule:
    """Normalized redirection entry."""

    import_path: str  # e.g., "rsc.io"
    repo_path: str  # e.g., "https://github.com/rsc"
    wildcard: bool = False

    @property
    def host(self) -> str:
        """Host portion of the import path."""
        return self.import_path.split("/", 1)[0]


# --- Record Model ---


@dataclass(frozen=True)
class Record:
    """Resolved location of an import path."""

    import_root: str
    vcs: str
    vcs_root: str
    suffix: str = ""


def go_import_content(record: Record) -> str:
    """Content of the go-import meta tag."""
    return f"{record.import_root} {record.vcs} {record.vcs_root}"


def doc_url(record: Record, base_url: str) -> str:
    """Documentation URL for the resolved path."""
    return f"{base_url.rstrip('/')}/{record.import_root}{record.suffix}"


# --- Input Models ---


@dataclass(frozen=True)
class ResolveInput:
    """Input for resolving a request path."""

    path: str


@dataclass(frozen=True)
class BuildRegistryInput:
    """Input for building a registry from import/repo pairs."""

    pairs: tuple[tuple[str, str], ...]


# --- Output Models ---


@dataclass(frozen=True)
class ResolveOutput:
    """Output for resolve operation."""

    record: Record | None
    errors: list[RuleValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class BuildRegistryOutput:
    """Output for build operation."""

    registry: RuleRegistry | None
    errors: list[RuleValidationError] = field(default_factory=list)
    success: bool = True
