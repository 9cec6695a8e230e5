"""Email adapter — plain-text RFQ email for providers dispatched by email.

Every section header is always present; empty sections say so explicitly
("Not specified" / "No files available") instead of disappearing.
"""

from ..schemas.dispatch import BuildOutboundArgs, DispatchMode, EmailDispatch
from ..utils.normalization import normalize_string
from .base import ProviderAdapter
from .rfq_content import (
    NOT_SPECIFIED,
    QUESTION_CHECKLIST,
    build_part_summary_items,
    build_timing_items,
    format_contact_line,
    format_file_links,
    format_quantity,
    format_requester,
    format_turnaround,
    offer_link,
    quote_title,
)


def _section(title: str, items: list[str], empty_label: str) -> list[str]:
    if not items:
        return [title, f"- {empty_label}"]
    return [title, *(f"- {item}" for item in items)]


def build_email_subject(args: BuildOutboundArgs) -> str:
    title = quote_title(args.quote)
    quantity = format_quantity(args.quote.quantity)
    parts = [
        normalize_string(args.quote.process),
        normalize_string(args.quote.material),
        f"Qty {quantity}" if quantity else "",
    ]
    parts = [p for p in parts if p]
    if parts:
        return f"Search request: {title} - {' / '.join(parts)}"
    return f"Search request: {title}"


class EmailAdapter(ProviderAdapter):
    mode = DispatchMode.EMAIL

    def build_outbound(self, args: BuildOutboundArgs) -> EmailDispatch:
        lines: list[str] = []
        provider_name = normalize_string(args.provider.name) or "team"
        lines += [f"Hello {provider_name},", ""]

        requester = format_requester(args)
        if requester:
            lines.append(f"Requesting an offer for {requester}.")
        else:
            lines.append("Requesting an offer for a new search request.")
        contact = format_contact_line(args)
        if contact:
            lines.append(f"Contact: {contact}")
        lines += [f"Requested turnaround: {format_turnaround(args)}.", ""]

        lines += _section("Part summary:", build_part_summary_items(args.quote), NOT_SPECIFIED)
        lines.append("")
        lines += _section("Timing:", build_timing_items(args.quote), NOT_SPECIFIED)
        lines.append("")

        files = [f"{label}: {url}" if url else label for label, url in format_file_links(args.files)]
        lines += _section("Files:", files, "No files available")
        lines.append("")

        link = offer_link(args)
        if link:
            lines += [
                "Offer submission link:",
                f"- Submit your offer here (no login required): {link}",
                "",
            ]

        lines.append("Questions:")
        lines += [f"- {q}" for q in QUESTION_CHECKLIST]
        lines += ["", "Reply to this email with your offer; include any notes/assumptions."]

        return EmailDispatch(subject=build_email_subject(args), body="\n".join(lines))
