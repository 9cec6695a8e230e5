"""
adapters/ — Dispatch channel registry

ADAPTERS is the single registration point. Order is dispatch priority:
the first adapter whose supports() accepts the provider builds the message.
Adding a channel means adding one ProviderAdapter subclass here.
"""

from ..schemas.dispatch import BuildOutboundArgs
from ..schemas.eligibility import ProviderRecord
from .api_adapter import ApiAdapter
from .base import ProviderAdapter, UnsupportedDispatchModeError
from .dispatch_mode import resolve_provider_dispatch_mode
from .email_adapter import EmailAdapter
from .web_form_adapter import WebFormAdapter

ADAPTERS: tuple[ProviderAdapter, ...] = (
    EmailAdapter(),
    WebFormAdapter(),
    ApiAdapter(),
)


def resolve_adapter(provider: ProviderRecord) -> ProviderAdapter | None:
    for adapter in ADAPTERS:
        if adapter.supports(provider):
            return adapter
    return None


def build_outbound(args: BuildOutboundArgs):
    """Build the OutboundDispatch for args.provider's channel.

    Raises UnsupportedDispatchModeError when no adapter supports the provider.
    """
    adapter = resolve_adapter(args.provider)
    if adapter is None:
        raise UnsupportedDispatchModeError(
            args.provider.id, resolve_provider_dispatch_mode(args.provider)
        )
    return adapter.build_outbound(args)


__all__ = [
    "ADAPTERS",
    "ApiAdapter",
    "EmailAdapter",
    "ProviderAdapter",
    "UnsupportedDispatchModeError",
    "WebFormAdapter",
    "build_outbound",
    "resolve_adapter",
]
