"""
Redirector component - import path to repository resolution.
"""

from ._impl import (
    DEFAULT_VCS,
    RuleRegistry,
    RuleRegistryBuilder,
    match,
    match_rule,
    normalize_pair,
    parse_pair,
    validate_repo_path,
    validate_wildcard,
)
from .component import build_from_sources, run, run_build, run_resolve
from .models import (
    BuildRegistryInput,
    BuildRegistryOutput,
    Record,
    ResolveInput,
    ResolveOutput,
    Rule,
    RuleConfigurationError,
    RuleValidationError,
    doc_url,
    go_import_content,
)
from .ports import ModuleSourcePort

__all__ = [
    # Entry points
    "run",
    "run_build",
    "run_resolve",
    "build_from_sources",
    # Input models
    "BuildRegistryInput",
    "ResolveInput",
    # Output models
    "BuildRegistryOutput",
    "Record",
    "ResolveOutput",
    "Rule",
    "RuleConfigurationError",
    "RuleValidationError",
    "doc_url",
    "go_import_content",
    # Ports
    "ModuleSourcePort",
    # _impl re-exports
    "DEFAULT_VCS",
    "RuleRegistry",
    "RuleRegistryBuilder",
    "match",
    "match_rule",
    "normalize_pair",
    "parse_pair",
    "validate_repo_path",
    "validate_wildcard",
]
