"""
Structured telemetry for title validation.
[CTX:PBI-1:1-7:TELEM]

This module provides structured logging capabilities for understanding:
- Which titles fail validation and why
- How often each issue kind occurs
- How long validation takes, including registry lookups
"""
import json
import logging
import threading
from collections import deque
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, List, Optional

logger = logging.getLogger(__name__)

# Most recent events kept in memory per recorder
DEFAULT_MAX_EVENTS = 1000


class TelemetryLevel(Enum):
    """Telemetry verbosity levels."""
    INFO = "info"
    DEBUG = "debug"


# [CTX:PBI-1:1-7:TELEM] Telemetry event structure
@dataclass
class ValidationEvent:
    """
    A single telemetry event describing one validation call.

    Attributes:
        timestamp: ISO 8601 timestamp of event
        title: The validated title
        valid: True if no issues were found
        issue_kinds: Issue kind values, in reporting order
        elapsed_ms: Validation duration in milliseconds
        registry_size: Number of component names consulted (None if the
            registry was not needed)
    """
    timestamp: str
    title: str
    valid: bool
    issue_kinds: List[str] = field(default_factory=list)
    elapsed_ms: float = 0.0
    registry_size: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for logging."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def to_json(self) -> str:
        """Convert event to JSON string."""
        return json.dumps(self.to_dict(), default=str)

    def to_keyvalue(self) -> str:
        """Convert event to key=value format."""
        pairs = []
        for key, value in self.to_dict().items():
            if isinstance(value, list):
                pairs.append(f"{key}={','.join(value)}")
            elif isinstance(value, str) and " " in value:
                pairs.append(f"{key}={json.dumps(value)}")
            else:
                pairs.append(f"{key}={value}")
        return " ".join(pairs)


# [CTX:PBI-1:1-7:TELEM] In-memory statistics tracker
@dataclass
class ValidationStats:
    """
    Aggregated statistics for telemetry analysis.

    Useful for tests and batch runs.
    """
    total_titles: int = 0
    total_invalid: int = 0
    total_elapsed_time: float = 0.0
    issues_by_kind: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        avg_latency = (
            self.total_elapsed_time / self.total_titles
            if self.total_titles > 0
            else 0.0
        )

        return {
            "total_titles": self.total_titles,
            "total_invalid": self.total_invalid,
            "avg_latency_ms": round(avg_latency, 3),
            "issues_by_kind": self.issues_by_kind,
        }


# [CTX:PBI-1:1-7:TELEM] Main telemetry recorder
class TelemetryRecorder:
    """
    Records and emits structured telemetry for validation calls.

    Features:
    - Structured logging in JSON or key=value format
    - Configurable verbosity (info/debug)
    - Optional in-memory statistics collection
    - Bounded history of recent events
    - Thread-safe operation
    """

    def __init__(
        self,
        level: TelemetryLevel = TelemetryLevel.INFO,
        format_json: bool = True,
        collect_stats: bool = False,
        max_events: int = DEFAULT_MAX_EVENTS,
    ):
        """
        Initialize telemetry recorder.

        Args:
            level: Logging verbosity level
            format_json: If True, log as JSON; otherwise use key=value
            collect_stats: If True, collect in-memory statistics
            max_events: Number of recent events kept for get_events();
                older events are dropped
        """
        self.level = level
        self.format_json = format_json
        self.collect_stats = collect_stats

        self._stats = ValidationStats()
        self._stats_lock = threading.Lock()

        self._events: Deque[ValidationEvent] = deque(maxlen=max_events)
        self._events_lock = threading.Lock()

    def record(self, event: ValidationEvent) -> None:
        """
        Record a telemetry event.

        Args:
            event: Event to record
        """
        if self.format_json:
            log_message = f"[CTX:PBI-1:1-7:TELEM] {event.to_json()}"
        else:
            log_message = f"[CTX:PBI-1:1-7:TELEM] {event.to_keyvalue()}"

        # Rejected titles are interesting at INFO; accepted ones only at DEBUG
        if self.level == TelemetryLevel.DEBUG or event.valid:
            logger.debug(log_message)
        else:
            logger.info(log_message)

        if self.collect_stats:
            with self._stats_lock:
                self._stats.total_titles += 1
                self._stats.total_elapsed_time += event.elapsed_ms

                if not event.valid:
                    self._stats.total_invalid += 1

                for kind in event.issue_kinds:
                    self._stats.issues_by_kind[kind] = (
                        self._stats.issues_by_kind.get(kind, 0) + 1
                    )

        with self._events_lock:
            self._events.append(event)

    def get_stats(self) -> ValidationStats:
        """Get current statistics snapshot."""
        with self._stats_lock:
            return ValidationStats(
                total_titles=self._stats.total_titles,
                total_invalid=self._stats.total_invalid,
                total_elapsed_time=self._stats.total_elapsed_time,
                issues_by_kind=self._stats.issues_by_kind.copy(),
            )

    def reset_stats(self) -> None:
        """Reset statistics."""
        with self._stats_lock:
            self._stats = ValidationStats()

    def get_events(self) -> List[ValidationEvent]:
        """Get the most recent events, oldest first (for testing)."""
        with self._events_lock:
            return list(self._events)

    def clear_events(self) -> None:
        """Clear event history."""
        with self._events_lock:
            self._events.clear()


# [CTX:PBI-1:1-7:TELEM] Global telemetry recorder instance
_global_recorder: Optional[TelemetryRecorder] = None
_recorder_lock = threading.Lock()


def get_recorder() -> TelemetryRecorder:
    """
    Get the global telemetry recorder instance.

    Creates a default recorder if none exists.
    """
    global _global_recorder

    if _global_recorder is None:
        with _recorder_lock:
            if _global_recorder is None:
                _global_recorder = TelemetryRecorder()

    return _global_recorder


def set_recorder(recorder: TelemetryRecorder) -> None:
    """
    Set the global telemetry recorder instance.

    Args:
        recorder: Recorder instance to use globally
    """
    global _global_recorder

    with _recorder_lock:
        _global_recorder = recorder


def create_event(
    title: str,
    issue_kinds: Optional[List[str]] = None,
    elapsed_ms: float = 0.0,
    registry_size: Optional[int] = None,
) -> ValidationEvent:
    """
    Helper to create a validation event with current timestamp.

    Args:
        title: The validated title
        issue_kinds: Issue kind values found, in order
        elapsed_ms: Validation duration in milliseconds
        registry_size: Number of component names consulted, if any

    Returns:
        ValidationEvent ready for recording
    """
    from datetime import datetime, timezone

    kinds = list(issue_kinds or [])
    return ValidationEvent(
        timestamp=datetime.now(timezone.utc).isoformat(),
        title=title,
        valid=not kinds,
        issue_kinds=kinds,
        elapsed_ms=elapsed_ms,
        registry_size=registry_size,
    )
