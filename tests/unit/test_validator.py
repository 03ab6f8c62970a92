"""
Unit tests for the title validator.
[CTX:PBI-1:1-8:TESTS]

Tests verify:
- Fail-fast schema and ticket checks
- Cumulative type, scope and subject issues in fixed order
- Node scope suggestions
- Per-call registry lookups and telemetry
"""
import pytest

from pr_title_lint.core.config import LintConfig
from pr_title_lint.core.issues import DEFAULT_MESSAGES, IssueKind
from pr_title_lint.core.telemetry import TelemetryRecorder, get_recorder, set_recorder
from pr_title_lint.core.validator import TitleValidator, validate_pr_title

from tests.stubs import stub_base_form


def kinds(issues):
    return [issue.kind for issue in issues]


class TestFailFast:
    """Schema mismatch and ticket numbers are reported alone."""

    @pytest.mark.parametrize("title", [
        "",
        "add support",
        "feat:add support",
        "feat : add support",
        "feat(core: add support",
        "(core): add support",
        "feat(core)(api): add support",
    ])
    def test_schema_mismatch(self, make_validator, title):
        """Test titles outside the schema yield exactly one mismatch issue."""
        issues = make_validator().validate(title)
        assert kinds(issues) == [IssueKind.CONVENTIONAL_SCHEMA_MISMATCH]
        assert issues[0].message == "PR title does not conform to PR title convention"

    @pytest.mark.parametrize("title", [
        "feat: add support for PAY-1234",
        "fix(Foo Node): Fixed N8N-42.",
        "Feat(unknown): Added ABC-1 (no-changelog) stuff.",
    ])
    def test_ticket_number_supersedes_everything(self, make_validator, title):
        """Test a ticket number hides every other defect."""
        issues = make_validator().validate(title)
        assert kinds(issues) == [IssueKind.TICKET_NUMBER_PRESENT]
        assert str(issues[0]) == "PR title must not contain a ticket number"

    def test_lowercase_hyphenated_words_are_not_tickets(self, make_validator):
        """Test version-like words do not count as ticket numbers."""
        assert make_validator().validate("build: bump node-18 images") == []


class TestValidTitles:
    """Titles that conform produce no issues."""

    @pytest.mark.parametrize("title", [
        "feat: add support",
        "feat(core): add retries",
        "feat(core)!: drop legacy api",
        "fix(Slack Node): handle rate limits",
        "fix(HTTP Request V2 Node): handle redirects",
        "chore: update deps (no-changelog)",
        "feat(): add support",
        "docs: 2fa setup guide",
    ])
    def test_valid(self, make_validator, title):
        assert make_validator().validate(title) == []


class TestTypeChecks:
    """Type vocabulary checks."""

    def test_type_is_case_sensitive(self, make_validator):
        """Test a capitalized type is not in the vocabulary."""
        issues = make_validator().validate("Feat: add support")
        assert kinds(issues) == [IssueKind.INVALID_TYPE]
        assert "`feat`, `fix`" in issues[0].message

    def test_type_not_found_and_invalid_type_together(self, make_validator):
        """Test both type issues are reported when the schema allows an empty type."""
        config = LintConfig(
            schema_pattern=r"^(?P<type>\w*)(?:\((?P<scope>[^()]*)\))?!?: (?P<subject>.*)$"
        )
        issues = make_validator(config).validate(": add support")
        assert kinds(issues) == [IssueKind.TYPE_NOT_FOUND, IssueKind.INVALID_TYPE]


class TestScopeChecks:
    """Scope vocabulary and node scope checks."""

    def test_unknown_plain_scope_has_no_suggestion(self, make_validator):
        issues = make_validator().validate("feat(infra): add support")
        assert kinds(issues) == [IssueKind.INVALID_SCOPE]
        assert "Did you mean" not in issues[0].message

    def test_unknown_node_scope_suggests_closest(self, make_validator):
        """Test an unregistered node gets the closest registered name."""
        issues = make_validator().validate("fix(Foo Node): add handler")
        assert kinds(issues) == [IssueKind.INVALID_SCOPE]
        assert issues[0].message.endswith(". Did you mean `Bar Node`?")
        assert issues[0].message.startswith("Unknown `scope` in PR title.")

    def test_unknown_node_scope_with_empty_registry(self, make_validator):
        issues = make_validator(node_names=()).validate("fix(Foo Node): add handler")
        assert kinds(issues) == [IssueKind.INVALID_SCOPE]
        assert "Did you mean" not in issues[0].message

    def test_node_suffix_is_required(self, make_validator):
        """Test a registered name without the suffix is not a valid scope."""
        issues = make_validator().validate("fix(Slack): handle rate limits")
        assert kinds(issues) == [IssueKind.INVALID_SCOPE]

    def test_scope_vocabulary_is_case_sensitive(self, make_validator):
        issues = make_validator().validate("fix(api): handle errors")
        assert kinds(issues) == [IssueKind.INVALID_SCOPE]

    def test_registry_is_read_on_every_call(self, recorder):
        """Test the registry lookup is repeated for each validation."""
        calls = []
        names = ["Slack"]

        def lookup():
            calls.append(1)
            return list(names)

        validator = TitleValidator(
            node_names=lookup, base_form=stub_base_form, recorder=recorder
        )
        assert validator.validate("fix(Teams Node): add cards") != []

        names.append("Teams")
        assert validator.validate("fix(Teams Node): add cards") == []
        assert len(calls) == 2

    def test_registry_skipped_for_vocabulary_scope(self, recorder):
        def lookup():
            raise AssertionError("registry should not be consulted")

        validator = TitleValidator(
            node_names=lookup, base_form=stub_base_form, recorder=recorder
        )
        assert validator.validate("feat(core): add support") == []

    def test_injected_closest_match(self, recorder):
        validator = TitleValidator(
            node_names=lambda: ["Slack"],
            base_form=stub_base_form,
            closest=lambda candidate, names: "Picked",
            recorder=recorder,
        )
        issues = validator.validate("fix(Foo Node): add handler")
        assert issues[0].message.endswith("Did you mean `Picked Node`?")


class TestSubjectChecks:
    """Subject style checks through the validator."""

    def test_all_subject_issues_in_order(self, make_validator):
        """Test uppercase, period and tense issues accumulate in order."""
        issues = make_validator().validate("fix(core): Fixed the bug.")
        assert kinds(issues) == [
            IssueKind.UPPERCASE_INITIAL_IN_SUBJECT,
            IssueKind.FINAL_PERIOD_IN_SUBJECT,
            IssueKind.NO_PRESENT_TENSE_IN_SUBJECT,
        ]

    def test_scope_and_subject_issues_accumulate(self, make_validator):
        issues = make_validator().validate("fix(api): Fixed the bug.")
        assert kinds(issues) == [
            IssueKind.INVALID_SCOPE,
            IssueKind.UPPERCASE_INITIAL_IN_SUBJECT,
            IssueKind.FINAL_PERIOD_IN_SUBJECT,
            IssueKind.NO_PRESENT_TENSE_IN_SUBJECT,
        ]

    def test_every_non_terminal_issue_at_once(self, make_validator):
        issues = make_validator().validate(
            "Feat(Foo Node): Added (no-changelog) support."
        )
        assert kinds(issues) == [
            IssueKind.INVALID_TYPE,
            IssueKind.INVALID_SCOPE,
            IssueKind.UPPERCASE_INITIAL_IN_SUBJECT,
            IssueKind.FINAL_PERIOD_IN_SUBJECT,
            IssueKind.NO_PRESENT_TENSE_IN_SUBJECT,
            IssueKind.SKIP_CHANGELOG_NOT_SUFFIX,
        ]

    def test_custom_marker(self, make_validator):
        """Test the changelog marker comes from configuration."""
        validator = make_validator(LintConfig(skip_changelog_marker="skip-changelog"))

        issues = validator.validate("chore: update deps skip-changelog extra")
        assert kinds(issues) == [IssueKind.SKIP_CHANGELOG_NOT_SUFFIX]
        assert issues[0].message == "`skip-changelog` must be suffix"

        assert validator.validate("chore: update deps skip-changelog") == []


class TestMessages:
    """Message templates and overrides."""

    def test_default_messages(self, make_validator):
        issues = make_validator().validate("feat: Add support.")
        assert [i.message for i in issues] == [
            DEFAULT_MESSAGES[IssueKind.UPPERCASE_INITIAL_IN_SUBJECT],
            DEFAULT_MESSAGES[IssueKind.FINAL_PERIOD_IN_SUBJECT],
        ]

    def test_message_override(self, make_validator):
        config = LintConfig(messages={"final_period_in_subject": "Drop the trailing dot"})
        issues = make_validator(config).validate("feat: add support.")
        assert [i.message for i in issues] == ["Drop the trailing dot"]


class TestPurity:
    """Validation is repeatable and records telemetry."""

    def test_idempotent(self, make_validator):
        validator = make_validator()
        title = "Feat(Foo Node): Added support."
        assert validator.validate(title) == validator.validate(title)

    def test_records_one_event_per_call(self, make_validator, recorder):
        validator = make_validator()
        validator.validate("feat: add support")
        validator.validate("fix(Foo Node): add handler")
        validator.validate("nope")

        events = recorder.get_events()
        assert len(events) == 3
        assert events[0].valid is True
        assert events[0].registry_size is None
        assert events[1].issue_kinds == ["invalid_scope"]
        assert events[1].registry_size == 3
        assert events[2].issue_kinds == ["conventional_schema_mismatch"]

        stats = recorder.get_stats()
        assert stats.total_titles == 3
        assert stats.total_invalid == 2


class TestValidatePrTitle:
    """Tests for the message-only helper."""

    def test_returns_messages(self):
        messages = validate_pr_title(
            "feat: Add support",
            node_names=lambda: [],
            base_form=stub_base_form,
        )
        assert messages == ["First char of subject must be lowercase"]

    def test_valid_title(self):
        assert validate_pr_title(
            "feat: add support", node_names=lambda: [], base_form=stub_base_form
        ) == []

    def test_global_history_stays_bounded(self):
        """Test repeated calls through the global recorder keep a bounded history."""
        original = get_recorder()
        recorder = TelemetryRecorder(max_events=5)
        set_recorder(recorder)

        try:
            for i in range(20):
                validate_pr_title(
                    f"feat: add item {i}", node_names=lambda: [], base_form=stub_base_form
                )
        finally:
            set_recorder(original)

        events = recorder.get_events()
        assert len(events) == 5
        assert events[-1].title == "feat: add item 19"
