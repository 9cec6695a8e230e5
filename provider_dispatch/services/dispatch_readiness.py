"""Dispatch readiness — can this destination be sent on its channel right now?

Business Rules:
- "mailto" on either mode column counts as email
- email/mailto needs a provider email: destination override, then provider
  primary_email → email → contact_email
- web_form needs an RFQ URL: destination override, then provider rfq_url
- api has no per-provider prerequisite, so it is always ready
- Anything unrecognized is "Unsupported dispatch mode"
- Exactly one recommended fix: missing email > missing URL > unsupported mode

Diagnostics: not-ready results are reported to an optional caller-owned
NotReadyLogSink, which logs each (destination, mode, reasons) key once.
The check itself keeps no state.
"""

from typing import Callable

from loguru import logger

from ..adapters.dispatch_mode import normalize_mode_value, resolve_dispatch_mode_value
from ..schemas.dispatch import (
    DispatchMode,
    DispatchReadinessFix,
    DispatchReadinessResult,
    ReadinessDestination,
)
from ..utils.normalization import normalize_string

MISSING_EMAIL = "Missing provider email"
MISSING_RFQ_URL = "Missing RFQ URL"
UNSUPPORTED_MODE = "Unsupported dispatch mode"

MAILTO = "mailto"
UNKNOWN = "unknown"

# Priority order for the single recommended fix
_FIXES = (
    (MISSING_EMAIL, "Add provider email"),
    (MISSING_RFQ_URL, "Add RFQ URL"),
    (UNSUPPORTED_MODE, "Review dispatch mode"),
)


class NotReadyLogSink:
    """Logs each distinct not-ready combination once per sink instance.

    The caller decides the lifetime (one per process, per sweep, per
    request...). `emit` defaults to a Loguru debug record.
    """

    def __init__(self, emit: Callable[[str, dict], None] | None = None):
        self._seen: set[str] = set()
        self._emit = emit or self._log_debug

    @staticmethod
    def _log_debug(message: str, context: dict) -> None:
        logger.bind(**context).debug(message)

    def report(self, destination_id: str, mode: str, reasons: list[str]) -> bool:
        """Emit once per key. Returns True if this call emitted."""
        key = f"{destination_id}:{mode}:{'|'.join(reasons)}"
        if key in self._seen:
            return False
        self._seen.add(key)
        self._emit(
            "Destination not dispatchable",
            {
                "destination_id": destination_id,
                "dispatch_mode": mode,
                "blocking_reasons": list(reasons),
            },
        )
        return True


def resolve_effective_dispatch_mode(destination: ReadinessDestination) -> str:
    """email | mailto | web_form | api | unknown"""
    if MAILTO in (
        normalize_mode_value(destination.dispatch_mode),
        normalize_mode_value(destination.quoting_mode),
    ):
        return MAILTO
    mode = resolve_dispatch_mode_value(destination.dispatch_mode, destination.quoting_mode)
    return mode.value if mode else UNKNOWN


def resolve_provider_email(destination: ReadinessDestination) -> str:
    provider = destination.provider
    candidates = [destination.provider_email]
    if provider:
        candidates += [provider.primary_email, provider.email, provider.contact_email]
    for candidate in candidates:
        value = normalize_string(candidate)
        if value:
            return value
    return ""


def resolve_provider_rfq_url(destination: ReadinessDestination) -> str:
    provider = destination.provider
    return normalize_string(destination.provider_rfq_url) or normalize_string(
        provider.rfq_url if provider else None
    )


def build_recommended_fix(blocking_reasons: list[str]) -> DispatchReadinessFix | None:
    for reason, label in _FIXES:
        if reason in blocking_reasons:
            return DispatchReadinessFix(label=label)
    return None


def get_destination_dispatch_readiness(
    destination: ReadinessDestination,
    log_sink: NotReadyLogSink | None = None,
) -> DispatchReadinessResult:
    mode = resolve_effective_dispatch_mode(destination)
    blocking_reasons: list[str] = []

    if mode in (DispatchMode.EMAIL.value, MAILTO):
        if not resolve_provider_email(destination):
            blocking_reasons.append(MISSING_EMAIL)
    elif mode == DispatchMode.WEB_FORM.value:
        if not resolve_provider_rfq_url(destination):
            blocking_reasons.append(MISSING_RFQ_URL)
    elif mode == UNKNOWN:
        blocking_reasons.append(UNSUPPORTED_MODE)

    is_ready = not blocking_reasons
    if not is_ready and log_sink is not None:
        log_sink.report(normalize_string(destination.id) or "unknown", mode, blocking_reasons)

    return DispatchReadinessResult(
        is_ready=is_ready,
        blocking_reasons=blocking_reasons,
        recommended_fix=None if is_ready else build_recommended_fix(blocking_reasons),
    )
