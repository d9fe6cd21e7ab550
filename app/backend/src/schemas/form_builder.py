"""Pydantic schemas describing report template form structure.

A template is an ordered list of ``FormSection``s, each holding an ordered list
of typed ``FormField``s. Fields are a tagged union on ``type`` so that only
dropdowns carry ``options``.
"""

import enum
import logging
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


class FieldType(str, enum.Enum):
    """Input types a template field can have."""

    TEXT = "text"
    NUMBER = "number"
    TEXTAREA = "textarea"
    BOOLEAN = "boolean"
    CHECKBOX = "checkbox"
    DROPDOWN = "dropdown"
    IMAGE = "image"
    DATE = "date"


class FormFieldBase(BaseModel):
    """Attributes shared by every field variant."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, max_length=100)
    label: str = Field(..., min_length=1, max_length=255)
    required: bool = Field(False, description="Whether a value must be provided")
    placeholder: str | None = Field(None, max_length=255)
    order: int = Field(..., ge=1, description="Field order within its section (1-indexed)")
    category_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("category_id", "categoryId"),
    )


class InputField(FormFieldBase):
    """Free-input field (text, number, textarea, boolean, checkbox, image, date)."""

    type: Literal["text", "number", "textarea", "boolean", "checkbox", "image", "date"]

    @model_validator(mode="before")
    @classmethod
    def drop_options(cls, data: Any) -> Any:
        """Ignore ``options`` on fields that are not dropdowns."""
        if isinstance(data, dict) and data.get("options") is not None:
            logger.warning(
                "Ignoring options on non-dropdown field: field_id=%s type=%s",
                data.get("id"),
                data.get("type"),
            )
            data = {key: value for key, value in data.items() if key != "options"}
        return data


class DropdownField(FormFieldBase):
    """Single choice among a fixed list of options."""

    type: Literal["dropdown"]
    options: list[str] = Field(..., min_length=1, description="Selectable options")

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        """Options must be non-blank and distinct."""
        if any(not option.strip() for option in v):
            raise ValueError("dropdown options must not be blank")
        if len(set(v)) != len(v):
            raise ValueError("dropdown options must be unique")
        return v


FormField = Annotated[InputField | DropdownField, Field(discriminator="type")]


class FormSection(BaseModel):
    """Ordered group of fields inside a template."""

    id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    order: int = Field(..., ge=1, description="Section order within the template (1-indexed)")
    fields: list[FormField] = Field(default_factory=list)

    @field_validator("fields")
    @classmethod
    def validate_fields(cls, v: list[InputField | DropdownField]) -> list[InputField | DropdownField]:
        """Field ids must be unique within a section; fields are kept sorted by order."""
        ids = [field.id for field in v]
        duplicates = sorted({field_id for field_id in ids if ids.count(field_id) > 1})
        if duplicates:
            raise ValueError(f"Duplicate field ids in section: {', '.join(duplicates)}")
        return sorted(v, key=lambda field: field.order)


def normalize_sections(sections: list[FormSection]) -> list[FormSection]:
    """Reject duplicate section ids and return sections sorted by order."""
    ids = [section.id for section in sections]
    duplicates = sorted({section_id for section_id in ids if ids.count(section_id) > 1})
    if duplicates:
        raise ValueError(f"Duplicate section ids in template: {', '.join(duplicates)}")
    return sorted(sections, key=lambda section: section.order)
