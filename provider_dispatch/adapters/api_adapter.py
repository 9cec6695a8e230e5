"""API adapter — reserved channel for providers with a quoting API.

Builds a stable JSON document from the same content fields the email and
web form adapters use. No provider integration consumes it yet.
"""

import json

from ..schemas.dispatch import ApiDispatch, BuildOutboundArgs, DispatchMode
from ..utils.normalization import normalize_string
from .base import ProviderAdapter
from .rfq_content import (
    QUESTION_CHECKLIST,
    build_part_summary_items,
    build_timing_items,
    format_contact_line,
    format_file_links,
    format_requester,
    offer_link,
    quote_title,
)


class ApiAdapter(ProviderAdapter):
    mode = DispatchMode.API

    def build_outbound(self, args: BuildOutboundArgs) -> ApiDispatch:
        payload = {
            "quote_id": args.quote.id,
            "title": quote_title(args.quote),
            "provider_id": args.provider.id,
            "destination_id": normalize_string(args.destination.id if args.destination else None) or None,
            "requester": format_requester(args) or None,
            "contact": format_contact_line(args) or None,
            "part_summary": build_part_summary_items(args.quote),
            "timing": build_timing_items(args.quote),
            "files": [{"label": label, "url": url or None} for label, url in format_file_links(args.files)],
            "offer_link": offer_link(args) or None,
            "questions": list(QUESTION_CHECKLIST),
        }
        return ApiDispatch(payload_json=json.dumps(payload, sort_keys=True))
