"""
Subject style checks.
[CTX:PBI-1:1-5:SUBJECT]

The subject must:
- start with a lowercase letter (or a non-letter)
- not end with a period
- start with a verb in its base form ("add", not "added" or "adding")
- carry the changelog-skip marker, if at all, as its final space-separated token
"""
import re
from collections.abc import Callable
from typing import List, Optional

from .issues import Issue, IssueKind, MessageCatalog

BaseFormReducer = Callable[[str], str]

_UPPERCASE_INITIAL = re.compile(r"[A-Z]")


def starts_with_uppercase(subject: str) -> bool:
    """ASCII letters only; digits and punctuation never count as uppercase."""
    return bool(_UPPERCASE_INITIAL.match(subject[:1]))


def ends_with_period(subject: str) -> bool:
    return subject.endswith(".")


def uses_present_tense(subject: str, base_form: BaseFormReducer) -> bool:
    verb = subject.split(" ")[0]
    return verb == base_form(verb)


def skip_changelog_is_suffix(subject: str, marker: str) -> bool:
    return re.search(" " + re.escape(marker) + r"\Z", subject) is not None


def check_uppercase_initial(subject: str, messages: MessageCatalog) -> Optional[Issue]:
    if starts_with_uppercase(subject):
        return messages.issue(IssueKind.UPPERCASE_INITIAL_IN_SUBJECT)
    return None


def check_final_period(subject: str, messages: MessageCatalog) -> Optional[Issue]:
    if ends_with_period(subject):
        return messages.issue(IssueKind.FINAL_PERIOD_IN_SUBJECT)
    return None


def check_present_tense(
    subject: str,
    base_form: BaseFormReducer,
    messages: MessageCatalog,
) -> Optional[Issue]:
    if not uses_present_tense(subject, base_form):
        return messages.issue(IssueKind.NO_PRESENT_TENSE_IN_SUBJECT)
    return None


def check_skip_changelog(
    subject: str,
    marker: str,
    messages: MessageCatalog,
) -> Optional[Issue]:
    if marker in subject and not skip_changelog_is_suffix(subject, marker):
        return messages.issue(IssueKind.SKIP_CHANGELOG_NOT_SUFFIX)
    return None


def check_subject(
    subject: str,
    base_form: BaseFormReducer,
    marker: str,
    messages: MessageCatalog,
) -> List[Issue]:
    """Run every subject check and collect the issues in a fixed order."""
    results = [
        check_uppercase_initial(subject, messages),
        check_final_period(subject, messages),
        check_present_tense(subject, base_form, messages),
        check_skip_changelog(subject, marker, messages),
    ]
    return [issue for issue in results if issue is not None]
