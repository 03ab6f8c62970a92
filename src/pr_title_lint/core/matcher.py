"""
Schema matching for PR titles.
[CTX:PBI-1:1-3:SCHEMA]

Splits a raw title into type, scope and subject. Nothing is normalized
before matching: case, whitespace and punctuation are all significant.
"""
import re
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TitleMatch:
    """
    Groups extracted from a title that matched the conventional schema.

    Attributes:
        type: Commit kind token (e.g. "feat")
        scope: Text between the parentheses, or None when absent
        subject: Everything after ": "
    """
    type: Optional[str]
    scope: Optional[str]
    subject: str


def match_title(title: str, schema: re.Pattern) -> Optional[TitleMatch]:
    """Decompose a title with the schema pattern, or return None if it does not match."""
    match = schema.match(title)
    if match is None:
        return None

    groups = match.groupdict()
    return TitleMatch(
        type=groups.get("type"),
        scope=groups.get("scope"),
        subject=groups.get("subject") or "",
    )


def contains_ticket_number(title: str, ticket: re.Pattern) -> bool:
    """Check whether an issue-tracker reference appears anywhere in the title."""
    return ticket.search(title) is not None
