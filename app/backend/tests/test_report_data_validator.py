"""Tests for matching captured report data against template sections."""

from src.schemas.report_submission import SubmissionSection
from src.services.report_data_validator import validate_report_data
from tests.fixtures.submissions import COMPLETE_REPORT_DATA
from tests.fixtures.templates import INSPECTION_SECTIONS


def _sections(data):
    return [SubmissionSection.model_validate(section) for section in data]


def _site(*values):
    return [{"id": "site", "name": "Site inspection", "data": list(values)}]


def test_complete_data_is_valid():
    assert validate_report_data(INSPECTION_SECTIONS, _sections(COMPLETE_REPORT_DATA)) == []


def test_missing_required_fields_reported():
    errors = validate_report_data(INSPECTION_SECTIONS, [])

    assert errors == [
        "required field 'inspector' in section 'site' is missing",
        "required field 'condition' in section 'site' is missing",
    ]


def test_required_check_can_be_skipped():
    assert validate_report_data(INSPECTION_SECTIONS, [], check_required=False) == []


def test_blank_value_counts_as_missing():
    data = _site(
        {"id": "inspector", "name": "Inspector name", "value": "   ", "type": "text"},
        {"id": "condition", "name": "Overall condition", "value": "Fair", "type": "dropdown"},
    )

    errors = validate_report_data(INSPECTION_SECTIONS, _sections(data))

    assert errors == ["required field 'inspector' in section 'site' is missing"]


def test_unknown_section_and_field_reported():
    data = _site({"id": "weather", "name": "Weather", "value": "Sunny", "type": "text"})
    data.append({"id": "extras", "name": "Extras", "data": []})

    errors = validate_report_data(INSPECTION_SECTIONS, _sections(data), check_required=False)

    assert "unknown field 'weather' in section 'site'" in errors
    assert "unknown section 'extras'" in errors


def test_type_mismatch_reported():
    data = _site({"id": "notes", "name": "Notes", "value": 3, "type": "number"})

    errors = validate_report_data(INSPECTION_SECTIONS, _sections(data), check_required=False)

    assert errors == ["field 'notes' in section 'site' has type 'number', expected 'textarea'"]


def test_dropdown_value_must_be_an_option():
    data = _site(
        {"id": "condition", "name": "Overall condition", "value": "Excellent", "type": "dropdown"}
    )

    errors = validate_report_data(INSPECTION_SECTIONS, _sections(data), check_required=False)

    assert errors == ["field 'condition' in section 'site' value is not one of the options"]
