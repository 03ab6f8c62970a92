"""Shared fixtures and collaborator stubs."""
import pytest

from pr_title_lint.core.config import LintConfig
from pr_title_lint.core.issues import MessageCatalog
from pr_title_lint.core.telemetry import TelemetryRecorder
from pr_title_lint.core.validator import TitleValidator

from tests.stubs import stub_base_form


@pytest.fixture
def messages():
    return MessageCatalog.from_config(LintConfig())


@pytest.fixture
def recorder():
    return TelemetryRecorder(collect_stats=True)


@pytest.fixture
def make_validator(recorder):
    """Build a validator with stubbed collaborators."""
    def _make(config=None, node_names=("Bar", "Slack", "HTTP Request")):
        names = list(node_names)
        return TitleValidator(
            config=config or LintConfig(),
            node_names=lambda: names,
            base_form=stub_base_form,
            recorder=recorder,
        )
    return _make
