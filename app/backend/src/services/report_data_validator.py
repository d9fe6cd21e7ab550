"""Checks captured report data against the template it answers."""

import logging
from typing import Any

from src.schemas.form_builder import DropdownField, FieldType, FormSection
from src.schemas.report_submission import SubmissionSection

logger = logging.getLogger(__name__)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, list | dict) and not value:
        return True
    return False


def validate_report_data(
    template_sections: list[dict[str, Any]],
    report_data: list[SubmissionSection],
    check_required: bool = True,
) -> list[str]:
    """Return a list of mismatches between ``report_data`` and the template.

    Unknown section or field ids, field types that differ from the template and
    dropdown values outside the allowed options are always reported. Missing or
    empty required fields are reported only when ``check_required`` is set,
    which lets drafts be saved incomplete.
    """
    sections = [FormSection.model_validate(section) for section in template_sections]
    sections_by_id = {section.id: section for section in sections}
    errors: list[str] = []

    captured: dict[tuple[str, str], Any] = {}
    for submitted_section in report_data:
        section = sections_by_id.get(submitted_section.id)
        if section is None:
            errors.append(f"unknown section '{submitted_section.id}'")
            continue

        fields_by_id = {field.id: field for field in section.fields}
        for value in submitted_section.data:
            field = fields_by_id.get(value.id)
            if field is None:
                errors.append(f"unknown field '{value.id}' in section '{section.id}'")
                continue
            if value.type != FieldType(field.type):
                errors.append(
                    f"field '{field.id}' in section '{section.id}' has type "
                    f"'{value.type.value}', expected '{field.type}'"
                )
                continue
            if (
                isinstance(field, DropdownField)
                and not _is_empty(value.value)
                and value.value not in field.options
            ):
                errors.append(
                    f"field '{field.id}' in section '{section.id}' value is not one of the options"
                )
            captured[(section.id, field.id)] = value.value

    if check_required:
        for section in sections:
            for field in section.fields:
                if field.required and _is_empty(captured.get((section.id, field.id))):
                    errors.append(
                        f"required field '{field.id}' in section '{section.id}' is missing"
                    )

    if errors:
        logger.debug("Report data validation failed: %s", errors)
    return errors
