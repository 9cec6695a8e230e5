"""Tests for provider_dispatch/adapters/dispatch_mode.py."""

import pytest

from provider_dispatch.adapters.dispatch_mode import (
    resolve_dispatch_mode_value,
    resolve_provider_dispatch_mode,
)
from provider_dispatch.schemas.dispatch import DispatchMode


@pytest.mark.parametrize(
    "dispatch_mode, quoting_mode, expected",
    [
        ("email", None, DispatchMode.EMAIL),
        ("  Web_Form ", None, DispatchMode.WEB_FORM),
        (None, "api", DispatchMode.API),
        ("email", "web_form", DispatchMode.EMAIL),
        ("carrier pigeon", "web_form", DispatchMode.WEB_FORM),
        ("", "", None),
        (None, None, None),
        ("mailto", None, None),
        (42, "email", DispatchMode.EMAIL),
    ],
)
def test_resolve_dispatch_mode_value(dispatch_mode, quoting_mode, expected):
    assert resolve_dispatch_mode_value(dispatch_mode, quoting_mode) == expected


def test_provider_legacy_column(make_provider):
    provider = make_provider("p1", quoting_mode="WEB_FORM")
    assert resolve_provider_dispatch_mode(provider) == DispatchMode.WEB_FORM


def test_provider_without_mode(make_provider):
    assert resolve_provider_dispatch_mode(make_provider("p1")) is None
