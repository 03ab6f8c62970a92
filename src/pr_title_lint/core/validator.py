"""
PR title validator.
[CTX:PBI-1:1-8:VALIDATOR]

Runs the title through the schema matcher, then the vocabulary and subject
checks, and returns every issue found in a fixed order:

1. schema mismatch or ticket number (reported alone, nothing else runs)
2. type not found, invalid type
3. invalid scope (with a suggestion for unknown "... Node" scopes)
4. uppercase initial, final period, present tense, changelog-skip suffix

An empty list means the title is valid.
"""
import logging
import re
import time
from collections.abc import Sequence
from typing import List, Optional

from .config import LintConfig, get_default_config
from .issues import Issue, IssueKind, MessageCatalog
from .language import to_base_form
from .matcher import contains_ticket_number, match_title
from .registry import build_registry
from .subject import BaseFormReducer, check_subject
from .suggest import closest_match
from .telemetry import TelemetryRecorder, create_event, get_recorder
from .vocabulary import (
    ClosestMatch,
    NameLookup,
    check_scope,
    check_type_known,
    check_type_present,
)

logger = logging.getLogger(__name__)


class TitleValidator:
    """
    Validates PR titles against a LintConfig.

    The component registry, base-form reducer and closest-match helper are
    injectable so the validator can be exercised with stubs. Validation has
    no side effects other than telemetry: the same title, configuration and
    registry contents always produce the same issues.
    """

    def __init__(
        self,
        config: Optional[LintConfig] = None,
        node_names: Optional[NameLookup] = None,
        base_form: Optional[BaseFormReducer] = None,
        closest: Optional[ClosestMatch] = None,
        recorder: Optional[TelemetryRecorder] = None,
    ):
        """
        Initialize validator.

        Args:
            config: Vocabularies and patterns (defaults to get_default_config())
            node_names: Callable returning current component display names
                (defaults to the registry described by config)
            base_form: Callable reducing a word to its base verb form
            closest: Callable picking the closest name for a suggestion
            recorder: Telemetry recorder (defaults to the global recorder)
        """
        self.config = config if config is not None else get_default_config()
        self._schema = re.compile(self.config.schema_pattern)
        self._ticket = re.compile(self.config.ticket_pattern)
        self._messages = MessageCatalog.from_config(self.config)
        self._types = frozenset(self.config.types)
        self._scopes = frozenset(self.config.scopes)

        if node_names is None:
            node_names = build_registry(self.config).display_names
        self._node_names = node_names
        self._base_form = base_form or to_base_form
        self._closest = closest or closest_match
        self._recorder = recorder

    def validate(self, title: str) -> List[Issue]:
        """
        Validate a title.

        Args:
            title: Raw PR title

        Returns:
            Issues in reporting order; empty if the title is valid
        """
        started = time.perf_counter()
        registry_sizes: List[int] = []

        def lookup() -> Sequence[str]:
            names = list(self._node_names())
            registry_sizes.append(len(names))
            return names

        issues = self._collect(title, lookup)

        elapsed_ms = (time.perf_counter() - started) * 1000
        recorder = self._recorder or get_recorder()
        recorder.record(create_event(
            title=title,
            issue_kinds=[issue.kind.value for issue in issues],
            elapsed_ms=elapsed_ms,
            registry_size=registry_sizes[-1] if registry_sizes else None,
        ))
        return issues

    def _collect(self, title: str, node_names: NameLookup) -> List[Issue]:
        match = match_title(title, self._schema)
        if match is None:
            logger.debug("Title does not match schema: %r", title)
            return [self._messages.issue(IssueKind.CONVENTIONAL_SCHEMA_MISMATCH)]

        if contains_ticket_number(title, self._ticket):
            logger.debug("Title contains a ticket number: %r", title)
            return [self._messages.issue(IssueKind.TICKET_NUMBER_PRESENT)]

        results = [
            check_type_present(match.type, self._messages),
            check_type_known(match.type, self._types, self._messages),
            check_scope(
                match.scope,
                self._scopes,
                node_names,
                self.config.node_scope_suffix,
                self._closest,
                self._messages,
            ),
        ]
        issues = [issue for issue in results if issue is not None]
        issues.extend(check_subject(
            match.subject,
            self._base_form,
            self.config.skip_changelog_marker,
            self._messages,
        ))
        return issues


def validate_pr_title(
    title: str,
    config: Optional[LintConfig] = None,
    node_names: Optional[NameLookup] = None,
    base_form: Optional[BaseFormReducer] = None,
    closest: Optional[ClosestMatch] = None,
) -> List[str]:
    """Validate a title and return the issue messages only."""
    validator = TitleValidator(
        config=config,
        node_names=node_names,
        base_form=base_form,
        closest=closest,
    )
    return [issue.message for issue in validator.validate(title)]
