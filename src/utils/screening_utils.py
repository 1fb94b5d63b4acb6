# src/utils/screening_utils.py
"""
Helpers shared by the IP and OP screening workflows: the therapeutic diet
flag transform and the custom-field parsing and filtering rules.
"""
import json
from typing import Any, Dict, Iterable, List, Optional, Tuple
from utils.exceptions import BadRequestException

# (storage column, display key)
DIET_FLAGS: Tuple[Tuple[str, str], ...] = (
    ("diet_normal", "normal"),
    ("diet_soft", "soft"),
    ("diet_liquid_clear", "liquidClear"),
    ("diet_liquid_full", "liquidFull"),
    ("diet_bland", "bland"),
    ("diet_diabetic", "diabetic"),
    ("diet_renal", "renal"),
    ("diet_cardiac", "cardiac"),
    ("diet_low_salt", "lowSalt"),
    ("diet_npo", "npo"),
    ("diet_enteral", "enteral"),
    ("diet_tpn", "tpn"),
    ("diet_others", "others"),
)

DIET_COLUMNS = tuple(column for column, _ in DIET_FLAGS)

IP_RESERVED_FIELDS = frozenset(
    {
        "IPNo",
        "HospNo",
        "name",
        "ward",
        "date",
        "age",
        "gender",
        "blood_group",
        "height",
        "weight",
        "bmi",
        "diagnosis",
        "food_allergies",
        "dietary_advice",
        "feed_rate",
        "nutrient_requirements",
        "attachment_path",
        "dietitian_name",
        "other_diet_note",
        "therapeutic_diet",
    }
)

OP_RESERVED_FIELDS = frozenset(
    {
        "HospNo",
        "name",
        "date",
        "age",
        "gender",
        "blood_group",
        "height",
        "weight",
        "bmi",
        "diagnosis",
        "food_allergies",
        "dietary_advice",
        "report_filename",
        "dietitian_name",
    }
)


def transform_diet_fields(diet: Optional[Dict[str, Any]]) -> Dict[str, int]:
    """
    Map a therapeutic diet selection onto the 13 storage flags as 0/1.

    Each flag may be supplied under its storage name (``diet_low_salt``) or its
    display name (``lowSalt``). Unknown keys are ignored and a missing
    selection yields all zeros.
    """
    diet = diet or {}
    flags = {}
    for column, display in DIET_FLAGS:
        value = diet.get(column, diet.get(display))
        flags[column] = 1 if value else 0
    return flags


def diet_flags_to_display(row: Any) -> Dict[str, bool]:
    """Rebuild the nested diet object from a screening row's flat columns"""
    return {display: bool(getattr(row, column)) for column, display in DIET_FLAGS}


def parse_json_field(raw: Optional[str], error_message: str, default: Any) -> Any:
    """Decode an optional JSON-encoded form field, 400 on malformed input"""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        raise BadRequestException(error_message)


def parse_diet_selection(raw: Optional[str]) -> Dict[str, int]:
    """Parse the ``therapeutic_diet`` form field into storage flags"""
    message = "Invalid therapeutic diet format"
    diet = parse_json_field(raw, message, default={})
    if diet is None:
        diet = {}
    if not isinstance(diet, dict):
        raise BadRequestException(message)
    return transform_diet_fields(diet)


def parse_custom_fields(raw: Optional[str]) -> List[Any]:
    """
    Parse the ``customFields`` form field.

    The field holds a JSON array; an element may itself be a JSON-encoded
    object. Anything that fails to decode is a 400.
    """
    message = "Invalid custom fields format"
    fields = parse_json_field(raw, message, default=[])
    if fields is None:
        return []
    if not isinstance(fields, list):
        raise BadRequestException(message)

    parsed = []
    for field in fields:
        if isinstance(field, str):
            field = parse_json_field(field, message, default=None)
        parsed.append(field)
    return parsed


def filter_custom_fields(
    candidates: Iterable[Any],
    name_key: str,
    value_key: str,
    reserved: Optional[Iterable[str]] = None,
) -> List[Tuple[str, str]]:
    """
    Keep well-formed custom fields whose trimmed name is not reserved.

    Entries that are not objects, have no string name, or whose name trims to
    nothing are dropped silently, as are names colliding with ``reserved``.
    Returns ``(field_name, field_value)`` pairs with the name trimmed and the
    value as text (see ``custom_field_text``).
    """
    reserved = frozenset(reserved or ())
    kept = []
    for field in candidates:
        if not isinstance(field, dict):
            continue
        name = field.get(name_key)
        if not isinstance(name, str) or not name.strip():
            continue
        name = name.strip()
        if name in reserved:
            continue
        kept.append((name, custom_field_text(field.get(value_key))))
    return kept


def custom_field_text(value: Any) -> str:
    """Stored text of a custom field value; non-strings keep their JSON form"""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)
