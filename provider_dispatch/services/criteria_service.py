"""Criteria normalizer — raw request attributes → EligibilityCriteria.

Pure and side-effect free. A separate collaborator resolves quote/upload
rows into the raw inputs; criteria_from_quote_rows() covers the common
column names so callers don't each re-implement the mapping.

Ship-to parsing:
  "Los Angeles, CA, USA"  → state CA, country US
  "Ontario / Canada"      → country CA
  "New York, NY"          → state NY, no country
  "Munich, Germany"       → country GERMANY (unknown names pass through)
  "Los Angeles"           → nothing (a lone unknown part is not a country)
  ""  + postal "TX"       → state TX (weak fallback, US or unset country only)
"""

import re
from typing import Any, Mapping

from ..schemas.eligibility import EligibilityCriteria, EligibilityInputs
from ..utils.normalization import (
    lookup_country_alias,
    normalize_country,
    normalize_optional_text,
    normalize_process,
    normalize_quantity,
    normalize_state,
)

_PART_SPLIT_RE = re.compile(r"[,/|]")


def parse_ship_to_location(
    ship_to: str | None, shipping_postal_code: str | None = None
) -> tuple[str | None, str | None]:
    """Return (state, country) from a free-text ship-to field.

    Later parts override earlier ones so "City, State, Country" resolves
    to the trailing state and country. A token that reads as a state code
    is never also taken as a country ("CA" is California here, not Canada).
    An unrecognized trailing part passes through as the country, but only
    when there is more than one part.
    """
    text = normalize_optional_text(ship_to)
    postal = normalize_optional_text(shipping_postal_code)
    state = None
    country = None
    last_part_has_state = False

    parts = [p.strip() for p in _PART_SPLIT_RE.split(text.upper())] if text else []
    parts = [p for p in parts if p]
    for part in parts:
        last_part_has_state = False
        part_state = normalize_state(part)
        if part_state:
            state = part_state
            last_part_has_state = True
            continue
        part_country = lookup_country_alias(part)
        if part_country:
            country = part_country
            continue
        for token in part.split():
            token_state = normalize_state(token)
            if token_state:
                state = token_state
                last_part_has_state = True
                continue
            token_country = lookup_country_alias(token)
            if token_country:
                country = token_country

    # A lone part with no alias is a city, not a country
    if country is None and len(parts) > 1 and not last_part_has_state:
        country = normalize_country(parts[-1])

    if not state and postal:
        postal_state = normalize_state(postal)
        if postal_state and (not country or country == "US"):
            state = postal_state

    return state, country


def build_eligibility_criteria(inputs: EligibilityInputs) -> EligibilityCriteria:
    state, country = parse_ship_to_location(inputs.ship_to, inputs.shipping_postal_code)
    return EligibilityCriteria(
        process=normalize_process(inputs.process),
        ship_to_state=state,
        ship_to_country=country,
        quantity=normalize_quantity(inputs.quantity),
    )


def normalize_criteria(criteria: EligibilityCriteria) -> EligibilityCriteria:
    """Re-normalize caller-supplied criteria (they may not come from the builder)."""
    return EligibilityCriteria(
        process=normalize_process(criteria.process),
        ship_to_state=normalize_state(criteria.ship_to_state),
        ship_to_country=normalize_country(criteria.ship_to_country),
        quantity=normalize_quantity(criteria.quantity),
    )


def criteria_from_quote_rows(
    quote_row: Mapping[str, Any] | None,
    upload_row: Mapping[str, Any] | None = None,
) -> EligibilityCriteria:
    """Build criteria from raw quote + upload rows.

    Reads quote.ship_to and upload.manufacturing_process / quantity /
    shipping_postal_code. Missing rows or columns leave the criteria
    unconstrained.
    """
    quote_row = quote_row or {}
    upload_row = upload_row or {}
    quantity = upload_row.get("quantity")
    if not isinstance(quantity, (str, int, float)) or isinstance(quantity, bool):
        quantity = None
    return build_eligibility_criteria(
        EligibilityInputs(
            process=normalize_optional_text(upload_row.get("manufacturing_process")),
            quantity=quantity,
            ship_to=normalize_optional_text(quote_row.get("ship_to")),
            shipping_postal_code=normalize_optional_text(
                upload_row.get("shipping_postal_code")
            ),
        )
    )
