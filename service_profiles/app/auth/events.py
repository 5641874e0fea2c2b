"""
Authentication lifecycle notifications.

The notifier fans events out to observability sinks (structured logs,
Prometheus counters). Exceptions raised by a sink never reach the caller.
"""

from typing import Callable, Iterable, List, Optional

from shared.logging import get_logger
from shared.metrics import MetricsCollector
from .models import AuthEvent, AuthEventType

AuthEventSink = Callable[[AuthEvent], None]


class LoggingAuthEventSink:
    """Write lifecycle events to the structured log."""

    def __init__(self, logger=None):
        self.logger = logger or get_logger("profiles.auth.events")

    def __call__(self, event: AuthEvent) -> None:
        if event.kind is AuthEventType.FAILED:
            self.logger.error("Token authentication failed", reason=event.reason, detail=event.detail)
        elif event.kind is AuthEventType.VALIDATED:
            self.logger.info("Token validated", subject=event.subject)
        else:
            self.logger.warning("Bearer challenge issued", reason=event.reason)


class MetricsAuthEventSink:
    """Count lifecycle events in Prometheus."""

    def __init__(self, metrics: MetricsCollector):
        self.metrics = metrics

    def __call__(self, event: AuthEvent) -> None:
        self.metrics.increment_counter("auth_events_total", event=event.kind.value)


class AuthEventNotifier:
    """Fire-and-forget fan-out of auth events to registered sinks."""

    def __init__(self, sinks: Optional[Iterable[AuthEventSink]] = None):
        self._sinks: List[AuthEventSink] = list(sinks or [])

    def add_sink(self, sink: AuthEventSink) -> None:
        self._sinks.append(sink)

    def notify(self, event: AuthEvent) -> None:
        for sink in self._sinks:
            try:
                sink(event)
            except Exception:  # noqa: BLE001 - sinks must never affect verification
                continue


def default_notifier(metrics: Optional[MetricsCollector] = None) -> AuthEventNotifier:
    """Notifier wired to the log and, when given, the metrics collector."""
    sinks: List[AuthEventSink] = [LoggingAuthEventSink()]
    if metrics is not None:
        sinks.append(MetricsAuthEventSink(metrics))
    return AuthEventNotifier(sinks)
