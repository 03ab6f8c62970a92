"""
Issue kinds and messages reported by the title validator.
[CTX:PBI-1:1-2:ISSUES]

Each issue kind maps to exactly one message template. Templates may reference
the configured vocabularies through these placeholders:
- {types}: allowed types, backtick-quoted and comma-separated
- {scopes}: allowed plain scopes, backtick-quoted and comma-separated
- {marker}: the changelog-skip marker
- {suffix}: the node scope suffix (e.g. " Node")
"""
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable

if TYPE_CHECKING:
    from .config import LintConfig


class IssueKind(Enum):
    """Validation failure categories, in reporting order."""
    CONVENTIONAL_SCHEMA_MISMATCH = "conventional_schema_mismatch"
    TICKET_NUMBER_PRESENT = "ticket_number_present"
    TYPE_NOT_FOUND = "type_not_found"
    INVALID_TYPE = "invalid_type"
    INVALID_SCOPE = "invalid_scope"
    UPPERCASE_INITIAL_IN_SUBJECT = "uppercase_initial_in_subject"
    FINAL_PERIOD_IN_SUBJECT = "final_period_in_subject"
    NO_PRESENT_TENSE_IN_SUBJECT = "no_present_tense_in_subject"
    SKIP_CHANGELOG_NOT_SUFFIX = "skip_changelog_not_suffix"


DEFAULT_MESSAGES: Dict[IssueKind, str] = {
    IssueKind.CONVENTIONAL_SCHEMA_MISMATCH:
        "PR title does not conform to PR title convention",
    IssueKind.TICKET_NUMBER_PRESENT:
        "PR title must not contain a ticket number",
    IssueKind.TYPE_NOT_FOUND:
        "Failed to find `type` in PR title",
    IssueKind.INVALID_TYPE:
        "Unknown `type` in PR title. Expected one of {types}",
    IssueKind.INVALID_SCOPE:
        "Unknown `scope` in PR title. Expected one of {scopes} "
        "or `{{componentName}}{suffix}`",
    IssueKind.UPPERCASE_INITIAL_IN_SUBJECT:
        "First char of subject must be lowercase",
    IssueKind.FINAL_PERIOD_IN_SUBJECT:
        "Subject must not end with a period",
    IssueKind.NO_PRESENT_TENSE_IN_SUBJECT:
        "Subject must use present tense",
    IssueKind.SKIP_CHANGELOG_NOT_SUFFIX:
        "`{marker}` must be suffix",
}


@dataclass(frozen=True)
class Issue:
    """A single validation failure."""
    kind: IssueKind
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}

    def __str__(self) -> str:
        return self.message


def _quoted(values: Iterable[str]) -> str:
    return ", ".join(f"`{v}`" for v in values)


def format_context(
    types: Iterable[str],
    scopes: Iterable[str],
    marker: str,
    suffix: str,
) -> Dict[str, str]:
    """Build the placeholder values available to message templates."""
    return {
        "types": _quoted(types),
        "scopes": _quoted(scopes),
        "marker": marker,
        "suffix": suffix,
    }


class MessageCatalog:
    """
    Renders issue messages from templates.

    Messages are rendered once at construction, so every issue of a kind
    carries the same canonical text. Only a suffix (the scope suggestion) can
    vary per issue.
    """

    def __init__(self, templates: Dict[IssueKind, str], context: Dict[str, str]):
        self._messages = {
            kind: template.format(**context) for kind, template in templates.items()
        }

    @classmethod
    def from_config(cls, config: "LintConfig") -> "MessageCatalog":
        """Create a catalog for a LintConfig."""
        context = format_context(
            config.types,
            config.scopes,
            config.skip_changelog_marker,
            config.node_scope_suffix,
        )
        return cls(config.message_templates(), context)

    def message(self, kind: IssueKind) -> str:
        return self._messages[kind]

    def issue(self, kind: IssueKind, suffix: str = "") -> Issue:
        """Create an issue of the given kind, optionally extending its message."""
        return Issue(kind=kind, message=self.message(kind) + suffix)
