"""Shared RFQ content formatting for every dispatch adapter.

Adapters render these items differently (bulleted email sections, a
single pipe-joined line for web forms, JSON for api) but must never
compute them on their own, so all channels show the same summary text.
"""

from datetime import date, datetime
from typing import Any

from ..schemas.dispatch import BuildOutboundArgs, FileLink, QuoteSummary
from ..utils.normalization import coerce_datetime, normalize_quantity, normalize_string

QUESTION_CHECKLIST = (
    "Price (total and unit)",
    "Lead time",
    "Assumptions or exclusions",
    "Any DFM or manufacturability concerns",
)

NOT_SPECIFIED = "Not specified"


def format_quantity(value: Any) -> str:
    """550 → "550", "1500 pcs" → "1,500". Unparseable strings pass through."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str) and not value.strip():
        return ""
    qty = normalize_quantity(value)
    if qty is None:
        return normalize_string(value)
    return f"{qty:,}"


def format_target_date(value: Any) -> str:
    """date / ISO string → "Mar 5, 2026". Free text passes through trimmed."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        day = value.date()
    elif isinstance(value, date):
        day = value
    else:
        text = normalize_string(value)
        if not text:
            return ""
        parsed = None
        try:
            parsed = date.fromisoformat(text)
        except ValueError:
            dt = coerce_datetime(text)
            parsed = dt.date() if dt else None
        if parsed is None:
            return text
        day = parsed
    return f"{day.strftime('%b')} {day.day}, {day.year}"


def format_requester(args: BuildOutboundArgs) -> str:
    """Name with company in parentheses, whichever part is known, else ""."""
    customer = args.customer
    name = normalize_string(customer.name if customer else None) or normalize_string(
        args.quote.requester_name
    )
    company = normalize_string(customer.company if customer else None) or normalize_string(
        args.quote.requester_company
    )
    if name and company:
        return f"{name} ({company})"
    return name or company


def format_contact_line(args: BuildOutboundArgs) -> str:
    customer = args.customer
    if not customer:
        return ""
    bits = [normalize_string(customer.email), normalize_string(customer.phone)]
    return " | ".join(b for b in bits if b)


def format_turnaround(args: BuildOutboundArgs) -> str:
    lead_time = normalize_string(args.quote.desired_lead_time)
    if lead_time:
        return lead_time
    target = format_target_date(args.quote.target_date)
    if target:
        return f"by {target}"
    return NOT_SPECIFIED.lower()


def quote_title(quote: QuoteSummary) -> str:
    return normalize_string(quote.title) or quote.id


def build_part_summary_items(quote: QuoteSummary) -> list[str]:
    items = []
    process = normalize_string(quote.process)
    if process:
        items.append(f"Process: {process}")
    material = normalize_string(quote.material)
    if material:
        items.append(f"Material: {material}")
    quantity = format_quantity(quote.quantity)
    if quantity:
        items.append(f"Quantity: {quantity}")
    tolerances = normalize_string(quote.tolerances)
    if tolerances:
        items.append(f"Tolerances: {tolerances}")
    finish = normalize_string(quote.finish)
    if finish:
        items.append(f"Finish: {finish}")
    return items


def build_timing_items(quote: QuoteSummary) -> list[str]:
    items = []
    lead_time = normalize_string(quote.desired_lead_time)
    if lead_time:
        items.append(f"Desired lead time: {lead_time}")
    target = format_target_date(quote.target_date)
    if target:
        items.append(f"Target date: {target}")
    return items


def format_file_links(files: list[FileLink]) -> list[tuple[str, str]]:
    """(label, url) pairs; unlabeled files become "File N", url may be ""."""
    out = []
    for index, file in enumerate(files or [], start=1):
        label = normalize_string(file.label) or f"File {index}"
        out.append((label, normalize_string(file.url)))
    return out


def offer_link(args: BuildOutboundArgs) -> str:
    return normalize_string(args.destination.offer_link if args.destination else None)
