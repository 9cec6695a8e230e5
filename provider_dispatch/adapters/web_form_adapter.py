"""Web form adapter — step-by-step instructions for filling a provider's RFQ form.

Nothing is sent directly: an ops teammate (or browser automation) follows
the instructions. The pasted details line reuses the email adapter's part
summary and timing items.
"""

from ..schemas.dispatch import BuildOutboundArgs, DispatchMode, WebFormDispatch
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


def resolve_web_form_url(args: BuildOutboundArgs) -> str | None:
    return normalize_string(args.provider.rfq_url) or normalize_string(args.provider.website) or None


def build_details_summary(args: BuildOutboundArgs) -> str:
    details = [f"Search request: {quote_title(args.quote)}"]
    details += build_part_summary_items(args.quote)
    details += build_timing_items(args.quote)
    return " | ".join(details)


def build_file_upload_summary(args: BuildOutboundArgs) -> str:
    files = format_file_links(args.files)
    if not files:
        return "Upload the CAD files from the search request package."
    listed = [f"{label} ({url})" if url else label for label, url in files]
    return f"Upload files: {'; '.join(listed)}"


def build_requester_summary(args: BuildOutboundArgs) -> str | None:
    parts = [p for p in (format_requester(args), format_contact_line(args)) if p]
    if not parts:
        return None
    return " - ".join(parts)


def build_question_line() -> str:
    asks = [q[:1].lower() + q[1:] for q in QUESTION_CHECKLIST]
    return f"Ask for: {', '.join(asks)}."


def build_web_form_instructions(args: BuildOutboundArgs, web_form_url: str | None) -> str:
    lines = []
    if web_form_url:
        lines.append(f"- Open the search request form: {web_form_url}")
    else:
        lines.append("- Open the provider form (website/portal).")
    lines.append(f"- {build_file_upload_summary(args)}")
    lines.append(f"- Paste search request details: {build_details_summary(args)}")

    requester = build_requester_summary(args)
    if requester:
        lines.append(f"- Include requester/contact info: {requester}")
    else:
        lines.append("- Include requester/contact info if required.")

    link = offer_link(args)
    if link:
        lines.append(f"- Provide our offer submission link: {link}")

    lines.append(f"- {build_question_line()}")
    return "\n".join(lines)


class WebFormAdapter(ProviderAdapter):
    mode = DispatchMode.WEB_FORM

    def build_outbound(self, args: BuildOutboundArgs) -> WebFormDispatch:
        url = resolve_web_form_url(args)
        return WebFormDispatch(
            web_form_url=url,
            web_form_instructions=build_web_form_instructions(args, url),
        )
