"""Core validation pipeline, configuration and supporting types."""

from pr_title_lint.core.config import (
    ConfigValidationError,
    LintConfig,
    get_default_config,
    load_config,
    validate_config,
)
from pr_title_lint.core.issues import Issue, IssueKind, MessageCatalog
from pr_title_lint.core.matcher import TitleMatch, contains_ticket_number, match_title
from pr_title_lint.core.registry import (
    ComponentRegistry,
    NodeDefinitionRegistry,
    StaticComponentRegistry,
    build_registry,
)
from pr_title_lint.core.suggest import closest_match
from pr_title_lint.core.telemetry import (
    TelemetryLevel,
    TelemetryRecorder,
    ValidationEvent,
    ValidationStats,
    get_recorder,
    set_recorder,
)
from pr_title_lint.core.validator import TitleValidator, validate_pr_title

__all__ = [
    # config
    "ConfigValidationError",
    "LintConfig",
    "get_default_config",
    "load_config",
    "validate_config",
    # issues
    "Issue",
    "IssueKind",
    "MessageCatalog",
    # matcher
    "TitleMatch",
    "contains_ticket_number",
    "match_title",
    # registry
    "ComponentRegistry",
    "NodeDefinitionRegistry",
    "StaticComponentRegistry",
    "build_registry",
    # suggest
    "closest_match",
    # telemetry
    "TelemetryLevel",
    "TelemetryRecorder",
    "ValidationEvent",
    "ValidationStats",
    "get_recorder",
    "set_recorder",
    # validator
    "TitleValidator",
    "validate_pr_title",
]
