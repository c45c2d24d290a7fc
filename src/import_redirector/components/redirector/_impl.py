"""
RuleRegistry - import path redirection rules and matching.

Handles rule validation, normalization, ordering and path resolution.

Key behaviors:
- Repo paths must be full URLs (contain "://")
- Wildcard "/*" must appear on both sides of a pair or on neither
- Rules are ordered by import path, descending, so longer paths sharing
  a prefix are tried first
- First matching rule wins
- A wildcard rule needs at least one path element past its root
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from operator import attrgetter

from .models import Record, Rule, RuleConfigurationError, RuleValidationError

logger = logging.getLogger(__name__)

DEFAULT_VCS = "git"
WILDCARD_SUFFIX = "/*"


# --- Validation Functions ---


def validate_repo_path(repo_path: str) -> list[RuleValidationError]:
    """Validate that the repo path is a full URL."""
    if "://" not in repo_path:
        return [
            RuleValidationError(
                code="repo_path_not_url",
                message=f"repo path must be full URL: {repo_path!r}",
                field="repo_path",
            )
        ]
    return []


def validate_wildcard(import_path: str, repo_path: str) -> list[RuleValidationError]:
    """Validate that both sides agree on the wildcard suffix."""
    if import_path.endswith(WILDCARD_SUFFIX) != repo_path.endswith(WILDCARD_SUFFIX):
        return [
            RuleValidationError(
                code="wildcard_mismatch",
                message=(
                    "either both import and repo must have /* or neither: "
                    f"{import_path!r} {repo_path!r}"
                ),
                field="import_path",
            )
        ]
    return []


def normalize_pair(import_path: str, repo_path: str) -> Rule:
    """
    Build a Rule from an already validated pair.

    Strips the wildcard suffix from both sides, then a trailing slash
    from the import path.
    """
    wildcard = import_path.endswith(WILDCARD_SUFFIX)
    if wildcard:
        import_path = import_path.removesuffix(WILDCARD_SUFFIX)
        repo_path = repo_path.removesuffix(WILDCARD_SUFFIX)
    return Rule(
        import_path=import_path.removesuffix("/"),
        repo_path=repo_path,
        wildcard=wildcard,
    )


def parse_pair(import_path: str, repo_path: str) -> Rule:
    """
    Validate and normalize one import/repo pair.

    Raises:
        RuleConfigurationError: If the pair is invalid.
    """
    errors = validate_repo_path(repo_path)
    errors.extend(validate_wildcard(import_path, repo_path))
    if errors:
        raise RuleConfigurationError(errors)

    rule = normalize_pair(import_path, repo_path)
    if not rule.import_path:
        raise RuleConfigurationError(
            [
                RuleValidationError(
                    code="import_path_required",
                    message="import path must not be empty",
                    field="import_path",
                )
            ]
        )
    return rule


# --- Matching ---


def match_rule(rule: Rule, path: str, vcs: str) -> Record | None:
    """Resolve path against a single rule, or None if it does not apply."""
    prefix = rule.import_path
    if path != prefix and not path.startswith(prefix + "/"):
        return None

    if not rule.wildcard:
        return Record(
            import_root=prefix,
            vcs=vcs,
            vcs_root=rule.repo_path,
            suffix=path[len(prefix) :],
        )

    if path == prefix:
        return None

    elem, sep, rest = path[len(prefix) + 1 :].partition("/")
    return Record(
        import_root=f"{prefix}/{elem}",
        vcs=vcs,
        vcs_root=f"{rule.repo_path}/{elem}",
        suffix=sep + rest,
    )


def match(rules: Iterable[Rule], path: str, vcs: str = DEFAULT_VCS) -> Record | None:
    """Return the record for the first rule that matches path."""
    for rule in rules:
        record = match_rule(rule, path, vcs)
        if record is not None:
            return record
    return None


# --- Registry ---


class RuleRegistry:
    """
    Ordered, immutable collection of rules.

    Built once by RuleRegistryBuilder.finalize() and shared read-only
    between request handlers.
    """

    __slots__ = ("_rules", "_vcs", "_hosts")

    def __init__(self, rules: Iterable[Rule], vcs: str = DEFAULT_VCS) -> None:
        """Initialize registry. Rules are sorted here."""
        self._rules: tuple[Rule, ...] = tuple(
            sorted(rules, key=attrgetter("import_path"), reverse=True)
        )
        self._vcs = vcs
        self._hosts: tuple[str, ...] = tuple(sorted({r.host for r in self._rules}))

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def vcs(self) -> str:
        return self._vcs

    @property
    def hosts(self) -> tuple[str, ...]:
        """Distinct hosts served by the registered rules."""
        return self._hosts

    def __len__(self) -> int:
        return len(self._rules)

    def match(self, path: str) -> Record | None:
        """Resolve a request path (host + path, trailing slash trimmed)."""
        return match(self._rules, path, self._vcs)

    def is_ping_path(self, path: str) -> bool:
        """Check if path is the liveness path of a registered import path."""
        return any(path == f"{r.import_path}/.ping" for r in self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry(rules={len(self._rules)}, vcs={self._vcs!r})"


class RuleRegistryBuilder:
    """Collects rules at startup and produces a RuleRegistry."""

    def __init__(self) -> None:
        """Initialize builder."""
        self._rules: list[Rule] = []

    def register(self, import_path: str, repo_path: str) -> Rule:
        """
        Register an import/repo pair.

        Args:
            import_path: Import path prefix, optionally ending in /*.
            repo_path: Repository URL, ending in /* iff import_path does.

        Returns:
            The normalized rule.

        Raises:
            RuleConfigurationError: If the pair is invalid.
        """
        rule = parse_pair(import_path, repo_path)
        self._rules.append(rule)
        logger.debug(
            f"Registered {rule.import_path} -> {rule.repo_path}"
            + (" (wildcard)" if rule.wildcard else "")
        )
        return rule

    def register_all(self, pairs: Iterable[tuple[str, str]]) -> None:
        """Register pairs in order, stopping at the first invalid one."""
        for import_path, repo_path in pairs:
            self.register(import_path, repo_path)

    @property
    def hosts(self) -> set[str]:
        """Hosts of all rules registered so far."""
        return {r.host for r in self._rules}

    def __len__(self) -> int:
        return len(self._rules)

    def finalize(self, vcs: str = DEFAULT_VCS) -> RuleRegistry:
        """Sort the collected rules and freeze them into a registry."""
        return RuleRegistry(self._rules, vcs=vcs)
