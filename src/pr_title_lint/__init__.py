"""Validate pull request titles against a conventional-commit schema."""

from pr_title_lint.core import (
    ConfigValidationError,
    Issue,
    IssueKind,
    LintConfig,
    TitleValidator,
    load_config,
    validate_pr_title,
)

__all__ = [
    "ConfigValidationError",
    "Issue",
    "IssueKind",
    "LintConfig",
    "TitleValidator",
    "load_config",
    "validate_pr_title",
]
