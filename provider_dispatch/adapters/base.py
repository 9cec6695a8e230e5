"""Provider adapter contract.

An adapter owns one dispatch channel: it says whether a provider uses that
channel and turns an RFQ bundle into the channel's outbound payload.
"""

from abc import ABC, abstractmethod

from ..schemas.dispatch import BuildOutboundArgs, DispatchMode
from ..schemas.eligibility import ProviderRecord
from .dispatch_mode import resolve_provider_dispatch_mode


class UnsupportedDispatchModeError(ValueError):
    """No registered adapter supports the provider's dispatch mode."""

    def __init__(self, provider_id: str, mode: DispatchMode | None):
        self.provider_id = provider_id
        self.mode = mode
        label = mode.value if mode else "unset"
        super().__init__(f"No dispatch adapter for provider {provider_id} (mode: {label})")


class ProviderAdapter(ABC):
    mode: DispatchMode

    def supports(self, provider: ProviderRecord) -> bool:
        return resolve_provider_dispatch_mode(provider) == self.mode

    @abstractmethod
    def build_outbound(self, args: BuildOutboundArgs):
        """Return the OutboundDispatch variant for this channel."""
