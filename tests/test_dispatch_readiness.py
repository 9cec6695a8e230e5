"""
test_dispatch_readiness.py — Tests for the dispatch readiness checker

Covers: mailto aliasing, email/RFQ URL resolution order, unsupported
modes, the single recommended fix, and the once-per-key not-ready sink.

Called by: pytest
Depends on: provider_dispatch.services.dispatch_readiness
"""

from provider_dispatch.schemas.dispatch import ReadinessDestination, ReadinessProviderContact
from provider_dispatch.services.dispatch_readiness import (
    MISSING_EMAIL,
    MISSING_RFQ_URL,
    UNSUPPORTED_MODE,
    NotReadyLogSink,
    build_recommended_fix,
    get_destination_dispatch_readiness,
    resolve_effective_dispatch_mode,
    resolve_provider_email,
)


def _destination(**kwargs) -> ReadinessDestination:
    return ReadinessDestination(id="d-1", **kwargs)


class TestEmailMode:
    def test_missing_email_blocks(self):
        result = get_destination_dispatch_readiness(
            _destination(dispatch_mode="email", provider=ReadinessProviderContact())
        )
        assert result.is_ready is False
        assert result.blocking_reasons == [MISSING_EMAIL]
        assert result.recommended_fix.label == "Add provider email"

    def test_mailto_with_email_is_ready(self):
        result = get_destination_dispatch_readiness(
            _destination(
                quoting_mode="mailto",
                provider=ReadinessProviderContact(contact_email="rfq@shop.test"),
            )
        )
        assert result.is_ready is True
        assert result.blocking_reasons == []
        assert result.recommended_fix is None

    def test_destination_override_wins(self):
        destination = _destination(
            dispatch_mode="email",
            provider_email="override@shop.test",
            provider=ReadinessProviderContact(primary_email="primary@shop.test"),
        )
        assert resolve_provider_email(destination) == "override@shop.test"

    def test_provider_field_priority(self):
        destination = _destination(
            provider=ReadinessProviderContact(
                primary_email="  ", email="email@shop.test", contact_email="contact@shop.test"
            )
        )
        assert resolve_provider_email(destination) == "email@shop.test"

    def test_no_provider_row(self):
        result = get_destination_dispatch_readiness(_destination(dispatch_mode="EMAIL"))
        assert result.blocking_reasons == [MISSING_EMAIL]


class TestWebFormMode:
    def test_missing_url_blocks(self):
        result = get_destination_dispatch_readiness(_destination(dispatch_mode="web_form"))
        assert result.blocking_reasons == [MISSING_RFQ_URL]
        assert result.recommended_fix.label == "Add RFQ URL"

    def test_provider_url(self):
        result = get_destination_dispatch_readiness(
            _destination(
                quoting_mode="web_form",
                provider=ReadinessProviderContact(rfq_url="https://shop.test/rfq"),
            )
        )
        assert result.is_ready is True

    def test_destination_url_override(self):
        result = get_destination_dispatch_readiness(
            _destination(dispatch_mode="web_form", provider_rfq_url="https://shop.test/form")
        )
        assert result.is_ready is True


class TestUnsupported:
    def test_unknown_mode(self):
        result = get_destination_dispatch_readiness(_destination(dispatch_mode="fax"))
        assert result.blocking_reasons == [UNSUPPORTED_MODE]
        assert result.recommended_fix.label == "Review dispatch mode"

    def test_missing_mode(self):
        assert get_destination_dispatch_readiness(_destination()).blocking_reasons == [UNSUPPORTED_MODE]

    def test_api_mode_is_ready(self):
        result = get_destination_dispatch_readiness(_destination(dispatch_mode="api"))
        assert result.is_ready is True
        assert result.blocking_reasons == []
        assert result.recommended_fix is None

    def test_api_ready_without_contact_details(self):
        result = get_destination_dispatch_readiness(_destination(quoting_mode="API", provider={}))
        assert result.is_ready is True


class TestEffectiveMode:
    def test_mailto_on_either_column(self):
        assert resolve_effective_dispatch_mode(_destination(dispatch_mode="MailTo")) == "mailto"
        assert resolve_effective_dispatch_mode(
            _destination(dispatch_mode="web_form", quoting_mode="mailto")
        ) == "mailto"

    def test_first_known_mode(self):
        assert resolve_effective_dispatch_mode(_destination(dispatch_mode="x", quoting_mode="email")) == "email"
        assert resolve_effective_dispatch_mode(_destination()) == "unknown"


class TestRecommendedFix:
    def test_priority(self):
        fix = build_recommended_fix([UNSUPPORTED_MODE, MISSING_RFQ_URL, MISSING_EMAIL])
        assert fix.label == "Add provider email"

    def test_no_reasons(self):
        assert build_recommended_fix([]) is None


class TestNotReadyLogSink:
    def test_logs_each_key_once(self):
        emitted = []
        sink = NotReadyLogSink(emit=lambda message, ctx: emitted.append(ctx))
        destination = _destination(dispatch_mode="email")

        for _ in range(3):
            get_destination_dispatch_readiness(destination, log_sink=sink)

        assert emitted == [{
            "destination_id": "d-1",
            "dispatch_mode": "email",
            "blocking_reasons": [MISSING_EMAIL],
        }]

    def test_distinct_keys_logged_separately(self):
        emitted = []
        sink = NotReadyLogSink(emit=lambda message, ctx: emitted.append(ctx["dispatch_mode"]))
        get_destination_dispatch_readiness(_destination(dispatch_mode="email"), log_sink=sink)
        get_destination_dispatch_readiness(_destination(dispatch_mode="web_form"), log_sink=sink)
        assert emitted == ["email", "web_form"]

    def test_ready_destinations_not_reported(self):
        emitted = []
        sink = NotReadyLogSink(emit=lambda message, ctx: emitted.append(ctx))
        get_destination_dispatch_readiness(
            _destination(dispatch_mode="email", provider_email="a@b.test"), log_sink=sink
        )
        assert emitted == []

    def test_separate_sinks_do_not_share_state(self):
        first = NotReadyLogSink(emit=lambda message, ctx: None)
        second = NotReadyLogSink(emit=lambda message, ctx: None)
        assert first.report("d-1", "email", [MISSING_EMAIL]) is True
        assert first.report("d-1", "email", [MISSING_EMAIL]) is False
        assert second.report("d-1", "email", [MISSING_EMAIL]) is True

    def test_default_emit_uses_loguru(self):
        from loguru import logger

        records = []
        handler_id = logger.add(lambda msg: records.append(msg.record), level="DEBUG")
        try:
            NotReadyLogSink().report("d-9", "fax", [UNSUPPORTED_MODE])
        finally:
            logger.remove(handler_id)
        assert records[0]["message"] == "Destination not dispatchable"
        assert records[0]["extra"]["destination_id"] == "d-9"
