# src/propvest/services/validation.py

import re
from typing import Any

from propvest.adapters.config import config
from propvest.adapters.logging_utils import get_logger
from propvest.domain.property import PropertyAnalysisInput

# Core fields that are truly required to reason about a deal
REQUIRED_CORE_FIELDS = [
    "address",
    "purchase_price",
    "down_payment",
]

# Defaults for financing terms the form lets users skip
DEFAULT_INTEREST_RATE = 7.5
DEFAULT_LOAN_TERM_YEARS = 30

EXPENSE_FIELDS = [
    "property_taxes",
    "insurance",
    "property_mgmt",
    "maintenance",
    "utilities",
    "hoa_fees",
    "equipment",
    "rehab_costs",
]

OPTIONAL_NUMERIC_FIELDS = [
    "current_value",
    "year_built",
    "bedrooms",
    "bathrooms",
    "square_footage",
    "lot_size",
]

logger = get_logger(__name__)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_RE.sub("_", key).lower()


def _snake_keys(raw: dict[str, Any]) -> dict[str, Any]:
    return {_snake(k): v for k, v in raw.items()}


def _to_num(val: Any, field_name: str) -> float:
    """
    Coerce values like:
      - 250000
      - "250000"
      - "250,000"
      - "6.5%"
    into float.
    """
    if val is None or (isinstance(val, str) and not val.strip()):
        raise ValueError(f"Missing required numeric field: {field_name}")
    if isinstance(val, bool):
        raise ValueError(f"Invalid type for {field_name}: {type(val)}")
    if isinstance(val, (int, float)):
        return float(val)
    if isinstance(val, str):
        s = val.strip().replace(",", "").replace("$", "")
        if s.endswith("%"):
            s = s[:-1]
        try:
            return float(s)
        except ValueError:
            raise ValueError(f"Invalid number for {field_name}: {val!r}") from None
    raise ValueError(f"Invalid type for {field_name}: {type(val)}")


def _to_num_optional(val: Any, default: float | None = 0.0) -> float | None:
    """
    Lenient converter for optional numeric fields.
    Returns `default` when missing/blank/garbage.
    """
    if val is None or isinstance(val, bool):
        return default
    if isinstance(val, (int, float)):
        return float(val)
    if isinstance(val, str):
        s = val.strip().replace(",", "").replace("$", "")
        if not s:
            return default
        if s.endswith("%"):
            s = s[:-1]
        try:
            return float(s)
        except ValueError:
            return default
    return default


def _sanitize_vacancy_rate(val: Any) -> float:
    """
    Vacancy is a fraction. Values above 1 (5, 50, "5%") are read as percents.
    Missing, blank, non-numeric, negative or above-100% values fall back to the
    default, with a warning when something was actually supplied.
    """
    v = _to_num_optional(val, default=None)
    if v is not None and v == v and v > 1.0:
        v /= 100.0
    if v is None or v != v or not 0.0 <= v <= 1.0:
        if val is not None and str(val).strip():
            logger.warning(
                "vacancy_rate_defaulted",
                extra={"context": {"raw_vacancy_rate": val, "vacancy_rate": config.VACANCY_RATE}},
            )
        return config.VACANCY_RATE
    return v


def _prepare_rooms(rooms: Any) -> list[dict[str, Any]]:
    if not rooms:
        return []
    if not isinstance(rooms, list):
        raise ValueError("rentable_rooms must be a list")
    prepared = []
    for i, room in enumerate(rooms, start=1):
        if not isinstance(room, dict):
            raise ValueError(f"Invalid room entry #{i}")
        room = _snake_keys(room)
        prepared.append(
            {
                "room_number": int(_to_num_optional(room.get("room_number"), default=i)),
                "weekly_rate": _to_num(room.get("weekly_rate"), f"rentable_rooms[{i}].weekly_rate"),
            }
        )
    return prepared


def _prepare_income(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Build the tagged rental-income record from either a nested `income` object
    or the flat gross_rent / rental_strategy / rentable_rooms fields.
    """
    source = raw.get("income")
    source = _snake_keys(source) if isinstance(source, dict) else raw

    rooms = _prepare_rooms(source.get("rentable_rooms"))
    gross_rent = _to_num_optional(source.get("gross_rent"), default=None)

    strategy = source.get("strategy") or source.get("rental_strategy")
    if not strategy:
        strategy = "individual-rooms" if rooms else "entire-house"

    if strategy == "individual-rooms":
        return {"strategy": strategy, "rentable_rooms": rooms, "gross_rent": gross_rent}
    if strategy == "entire-house":
        if gross_rent is None:
            raise ValueError("Missing required numeric field: gross_rent")
        return {"strategy": strategy, "gross_rent": gross_rent}
    raise ValueError(f"Unknown rental_strategy: {strategy!r}")


def _prepare_expenses(raw: dict[str, Any]) -> dict[str, float]:
    source = raw.get("expenses")
    source = _snake_keys(source) if isinstance(source, dict) else raw
    return {name: _to_num_optional(source.get(name)) for name in EXPENSE_FIELDS}


def prepare_payload(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Normalize an incoming analysis payload (form post, JSON file, CSV row).

    Responsibilities:
      - Accept camelCase or snake_case keys.
      - Ensure the core address/price/down-payment fields exist.
      - Normalize numeric and percent-like strings.
      - Apply financing defaults when terms are omitted.
      - Sanitize the vacancy rate.
      - Shape income and expenses into their nested records.
    """
    data = _snake_keys(raw)

    # 1. Check core required fields
    for name in REQUIRED_CORE_FIELDS:
        if name not in data:
            raise ValueError(f"Missing required field: {name}")

    cleaned: dict[str, Any] = {
        "address": str(data["address"]),
        "purchase_price": _to_num(data["purchase_price"], "purchase_price"),
        "down_payment": _to_num(data["down_payment"], "down_payment"),
    }

    # 2. Financing with defaults
    cleaned["interest_rate"] = _to_num(data.get("interest_rate", DEFAULT_INTEREST_RATE), "interest_rate")
    try:
        cleaned["loan_term"] = int(_to_num(data.get("loan_term", DEFAULT_LOAN_TERM_YEARS), "loan_term"))
    except ValueError:
        raise ValueError("Invalid loan_term") from None
    cleaned["closing_costs"] = _to_num_optional(data.get("closing_costs"))
    cleaned["pmi_rate"] = _to_num_optional(data.get("pmi_rate"))

    # 3. Descriptive fields
    if data.get("property_type"):
        cleaned["property_type"] = data["property_type"]
    if data.get("condition"):
        cleaned["condition"] = data["condition"]
    for name in OPTIONAL_NUMERIC_FIELDS:
        value = _to_num_optional(data.get(name), default=None)
        if value is not None:
            cleaned[name] = int(value) if name == "year_built" else value

    # 4. Income / expenses
    cleaned["income"] = _prepare_income(data)
    cleaned["vacancy_rate"] = _sanitize_vacancy_rate(data.get("vacancy_rate"))
    cleaned["expenses"] = _prepare_expenses(data)

    return cleaned


def parse_analysis_input(raw: dict[str, Any]) -> PropertyAnalysisInput:
    """
    Normalize then validate. Raises ValueError (pydantic's ValidationError is
    a subclass) with the offending field in the message.
    """
    return PropertyAnalysisInput.model_validate(prepare_payload(raw))
