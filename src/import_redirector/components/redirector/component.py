"""
Redirector component - import path resolution.

Builds the rule registry from configured pairs and resolves request
paths against it.

Invariants:
- I1: Repo paths are full URLs
- I2: Wildcard suffix present on both sides of a pair or neither
- I3: Rules are ordered by import path, descending, and never change
- I4: First matching rule wins
"""

from __future__ import annotations

from ._impl import DEFAULT_VCS, RuleRegistry, RuleRegistryBuilder
from .models import (
    BuildRegistryInput,
    BuildRegistryOutput,
    ResolveInput,
    ResolveOutput,
    RuleConfigurationError,
    RuleValidationError,
)
from .ports import ModuleSourcePort

# --- Component Entry Points ---


def run_build(
    inp: BuildRegistryInput,
    *,
    vcs: str = DEFAULT_VCS,
) -> BuildRegistryOutput:
    """
    Build a registry from import/repo pairs.

    Every pair is checked, so all invalid pairs are reported together.

    Args:
        inp: Input containing the pairs in registration order.
        vcs: Version control system applied to every record.

    Returns:
        BuildRegistryOutput with the registry or errors.
    """
    builder = RuleRegistryBuilder()
    errors: list[RuleValidationError] = []

    for import_path, repo_path in inp.pairs:
        try:
            builder.register(import_path, repo_path)
        except RuleConfigurationError as e:
            errors.extend(e.errors)

    if errors:
        return BuildRegistryOutput(registry=None, errors=errors, success=False)

    return BuildRegistryOutput(registry=builder.finalize(vcs=vcs), errors=[], success=True)


def build_from_sources(
    *sources: ModuleSourcePort,
    vcs: str = DEFAULT_VCS,
) -> BuildRegistryOutput:
    """Build a registry from pairs supplied by one or more sources, in order."""
    pairs = tuple(pair for source in sources for pair in source.iter_pairs())
    return run_build(BuildRegistryInput(pairs=pairs), vcs=vcs)


def run_resolve(
    inp: ResolveInput,
    *,
    registry: RuleRegistry,
) -> ResolveOutput:
    """
    Resolve a request path against the registry.

    Args:
        inp: Input containing the path (host + URL path).
        registry: Finalized rule registry.

    Returns:
        ResolveOutput with the record, or a not_found error.
    """
    record = registry.match(inp.path)

    if record is None:
        return ResolveOutput(
            record=None,
            errors=[
                RuleValidationError(
                    code="not_found",
                    message=f"No rule matches {inp.path}",
                    field="path",
                )
            ],
            success=False,
        )

    return ResolveOutput(record=record, errors=[], success=True)


def run(
    inp: BuildRegistryInput | ResolveInput,
    *,
    registry: RuleRegistry | None = None,
    vcs: str = DEFAULT_VCS,
) -> BuildRegistryOutput | ResolveOutput:
    """
    Main entry point for the redirector component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, BuildRegistryInput):
        return run_build(inp, vcs=vcs)
    elif isinstance(inp, ResolveInput):
        if registry is None:
            raise ValueError("registry is required to resolve a path")
        return run_resolve(inp, registry=registry)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
