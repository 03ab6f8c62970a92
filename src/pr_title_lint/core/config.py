"""
Configuration module for PR title lint settings.

This module provides configuration loading and validation for the vocabularies,
patterns and markers a project enforces on its pull request titles.
"""
# [CTX:PBI-1:1-1:CFG]

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .issues import DEFAULT_MESSAGES, IssueKind, format_context


class ConfigValidationError(ValueError):
    """Raised when a configuration does not have the expected structure."""


DEFAULT_TYPES = [
    "feat",
    "fix",
    "perf",
    "test",
    "docs",
    "refactor",
    "build",
    "ci",
    "chore",
]

DEFAULT_SCOPES = ["API", "benchmark", "core", "editor"]

DEFAULT_SKIP_CHANGELOG_MARKER = "(no-changelog)"

DEFAULT_SCHEMA_PATTERN = (
    r"^(?P<type>[^\s()!:]+)(?:\((?P<scope>[^()]*)\))?!?: (?P<subject>.*)$"
)

# Issue-tracker keys such as PAY-1234 or N8N-42
DEFAULT_TICKET_PATTERN = r"\b[A-Z][A-Z0-9]+-\d+\b"

DEFAULT_NODE_SCOPE_SUFFIX = " Node"

SCHEMA_GROUPS = ("type", "scope", "subject")


@dataclass
class LintConfig:
    """Vocabularies, patterns and markers used to validate a title."""

    types: list[str] = field(default_factory=lambda: list(DEFAULT_TYPES))
    scopes: list[str] = field(default_factory=lambda: list(DEFAULT_SCOPES))
    skip_changelog_marker: str = DEFAULT_SKIP_CHANGELOG_MARKER
    schema_pattern: str = DEFAULT_SCHEMA_PATTERN
    ticket_pattern: str = DEFAULT_TICKET_PATTERN
    node_scope_suffix: str = DEFAULT_NODE_SCOPE_SUFFIX
    node_names: list[str] = field(default_factory=list)
    node_definitions_dir: str | None = None
    messages: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LintConfig":
        """Create LintConfig from dictionary, using defaults for missing keys."""
        return cls(
            types=list(data.get("types", DEFAULT_TYPES)),
            scopes=list(data.get("scopes", DEFAULT_SCOPES)),
            skip_changelog_marker=data.get(
                "skip_changelog_marker", DEFAULT_SKIP_CHANGELOG_MARKER
            ),
            schema_pattern=data.get("schema_pattern", DEFAULT_SCHEMA_PATTERN),
            ticket_pattern=data.get("ticket_pattern", DEFAULT_TICKET_PATTERN),
            node_scope_suffix=data.get("node_scope_suffix", DEFAULT_NODE_SCOPE_SUFFIX),
            node_names=list(data.get("node_names", [])),
            node_definitions_dir=data.get("node_definitions_dir"),
            messages=dict(data.get("messages", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert LintConfig to a plain dictionary."""
        return {
            "types": list(self.types),
            "scopes": list(self.scopes),
            "skip_changelog_marker": self.skip_changelog_marker,
            "schema_pattern": self.schema_pattern,
            "ticket_pattern": self.ticket_pattern,
            "node_scope_suffix": self.node_scope_suffix,
            "node_names": list(self.node_names),
            "node_definitions_dir": self.node_definitions_dir,
            "messages": dict(self.messages),
        }

    def message_templates(self) -> dict[IssueKind, str]:
        """Default message templates with configured overrides applied."""
        templates = dict(DEFAULT_MESSAGES)
        for key, template in self.messages.items():
            templates[IssueKind(key)] = template
        return templates


DEFAULT_CONFIG: dict[str, Any] = LintConfig().to_dict()


def get_default_config() -> LintConfig:
    """Return a fresh default configuration."""
    return LintConfig.from_dict(DEFAULT_CONFIG)


def load_config(config_path: str | Path | None = None) -> LintConfig:
    """
    Load lint configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location,
            falling back to the built-in defaults when that file is absent.

    Returns:
        LintConfig for the project

    Raises:
        ConfigValidationError: If an explicit config file is missing, is invalid
            YAML or fails validation
    """
    if config_path is None:
        config_path = Path(__file__).parents[3] / "config" / "pr_title.yml"
        if not config_path.exists():
            return get_default_config()
    else:
        config_path = Path(config_path)
        if not config_path.is_file():
            raise ConfigValidationError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {config_path}: {e}") from e

    if not data:
        return get_default_config()

    validate_config(data)
    return LintConfig.from_dict(data)


def _require_string_list(data: dict[str, Any], key: str, allow_empty: bool = True) -> None:
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigValidationError(f"'{key}' must be a list of strings")
    if not allow_empty and not value:
        raise ConfigValidationError(f"'{key}' must not be empty")


def _require_pattern(data: dict[str, Any], key: str) -> re.Pattern:
    value = data[key]
    if not isinstance(value, str):
        raise ConfigValidationError(f"'{key}' must be a string")
    try:
        return re.compile(value)
    except re.error as e:
        raise ConfigValidationError(f"'{key}' is not a valid pattern: {e}") from e


def validate_config(data: Any) -> None:
    """
    Validate raw configuration data.

    Args:
        data: Parsed configuration (usually from YAML)

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not isinstance(data, dict):
        raise ConfigValidationError("Config must be a dictionary")

    if "types" in data:
        _require_string_list(data, "types", allow_empty=False)

    if "scopes" in data:
        _require_string_list(data, "scopes")

    if "node_names" in data:
        _require_string_list(data, "node_names")

    for key in ("skip_changelog_marker", "node_scope_suffix"):
        if key in data and (not isinstance(data[key], str) or not data[key]):
            raise ConfigValidationError(f"'{key}' must be a non-empty string")

    if "schema_pattern" in data:
        schema = _require_pattern(data, "schema_pattern")
        missing = [g for g in SCHEMA_GROUPS if g not in schema.groupindex]
        if missing:
            raise ConfigValidationError(
                f"'schema_pattern' must define named groups: {', '.join(missing)}"
            )

    if "ticket_pattern" in data:
        _require_pattern(data, "ticket_pattern")

    node_dir = data.get("node_definitions_dir")
    if node_dir is not None and not isinstance(node_dir, str):
        raise ConfigValidationError("'node_definitions_dir' must be a string")

    messages = data.get("messages", {})
    if not isinstance(messages, dict):
        raise ConfigValidationError("'messages' must be a dictionary")

    known_kinds = {kind.value for kind in IssueKind}
    sample = format_context(
        data.get("types", DEFAULT_TYPES),
        data.get("scopes", DEFAULT_SCOPES),
        data.get("skip_changelog_marker", DEFAULT_SKIP_CHANGELOG_MARKER),
        data.get("node_scope_suffix", DEFAULT_NODE_SCOPE_SUFFIX),
    )
    for key, template in messages.items():
        if key not in known_kinds:
            raise ConfigValidationError(f"Unknown issue kind in 'messages': {key}")
        if not isinstance(template, str):
            raise ConfigValidationError(f"Message for {key} must be a string")
        try:
            template.format(**sample)
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigValidationError(
                f"Message for {key} has an invalid placeholder: {e}"
            ) from e
