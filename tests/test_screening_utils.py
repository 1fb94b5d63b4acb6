import json

import pytest

from services.file_storage import file_storage
from services.screening_service import OPScreeningService
from utils.exceptions import BadRequestException
from utils.screening_utils import (
    DIET_COLUMNS,
    IP_RESERVED_FIELDS,
    filter_custom_fields,
    parse_custom_fields,
    parse_diet_selection,
    transform_diet_fields,
)


def test_transform_diet_selected_flags_only():
    flags = transform_diet_fields({"diabetic": True, "renal": True})
    assert len(flags) == 13
    assert set(flags) == set(DIET_COLUMNS)
    assert flags["diet_diabetic"] == 1
    assert flags["diet_renal"] == 1
    assert sum(flags.values()) == 2


def test_transform_diet_accepts_storage_names():
    flags = transform_diet_fields({"diet_low_salt": True, "liquidClear": 1, "npo": False})
    assert flags["diet_low_salt"] == 1
    assert flags["diet_liquid_clear"] == 1
    assert flags["diet_npo"] == 0


def test_transform_diet_missing_object_is_all_zero():
    assert set(transform_diet_fields(None).values()) == {0}
    assert set(transform_diet_fields({"unknown": True}).values()) == {0}


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", '"text"'])
def test_parse_diet_selection_rejects_bad_input(raw):
    with pytest.raises(BadRequestException) as exc:
        parse_diet_selection(raw)
    assert exc.value.detail == "Invalid therapeutic diet format"


def test_parse_custom_fields_decodes_nested_json_strings():
    raw = json.dumps(['{"field_name": "MUAC", "field_value": 22}', {"field_name": "Waist"}])
    assert parse_custom_fields(raw) == [
        {"field_name": "MUAC", "field_value": 22},
        {"field_name": "Waist"},
    ]


def test_parse_custom_fields_invalid_json():
    with pytest.raises(BadRequestException) as exc:
        parse_custom_fields("[{broken")
    assert exc.value.detail == "Invalid custom fields format"


def test_parse_custom_fields_blank_is_empty():
    assert parse_custom_fields(None) == []
    assert parse_custom_fields("  ") == []


def test_filter_custom_fields_rules():
    candidates = [
        {"field_name": " Waist ", "field_value": "80"},
        {"field_name": "IPNo", "field_value": "IP-9"},
        {"field_name": "   ", "field_value": "x"},
        {"field_name": 12, "field_value": "x"},
        "not an object",
        {"field_name": "MUAC", "field_value": 22},
        {"field_name": "Notes"},
        {"field_name": "NG tube", "field_value": True},
        {"field_name": "Feed volume", "field_value": 1.5},
        {"field_name": "Extra", "field_value": {"a": 1}},
    ]
    kept = filter_custom_fields(candidates, "field_name", "field_value", IP_RESERVED_FIELDS)
    assert kept == [
        ("Waist", "80"),
        ("MUAC", "22"),
        ("Notes", ""),
        ("NG tube", "true"),
        ("Feed volume", "1.5"),
        ("Extra", '{"a": 1}'),
    ]


def test_op_reserved_fields_only_when_enforced():
    raw = json.dumps(
        [
            {"fieldName": "name", "fieldValue": "shadow"},
            {"fieldName": "Waist", "fieldValue": "80"},
        ]
    )
    lenient = OPScreeningService(file_storage)
    strict = OPScreeningService(file_storage, enforce_reserved_fields=True)

    assert lenient.filter_custom_fields(raw) == [("name", "shadow"), ("Waist", "80")]
    assert strict.filter_custom_fields(raw) == [("Waist", "80")]
