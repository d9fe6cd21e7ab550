from src.schemas.form_builder import DropdownField, FieldType, FormField, FormSection, InputField
from src.schemas.project_type import (
    ProjectTypeCreate,
    ProjectTypeList,
    ProjectTypeRead,
    ProjectTypeUpdate,
)
from src.schemas.report_submission import (
    FieldValue,
    ProjectSummary,
    ReportStatistics,
    ReportSubmissionCreate,
    ReportSubmissionList,
    ReportSubmissionRead,
    ReportSubmissionUpdate,
    ReviewDecision,
    SubmissionSection,
)
from src.schemas.report_template import (
    ReportTemplateCreate,
    ReportTemplateList,
    ReportTemplateRead,
    ReportTemplateUpdate,
)

__all__ = [
    "FieldType",
    "FormField",
    "FormSection",
    "InputField",
    "DropdownField",
    "ProjectTypeCreate",
    "ProjectTypeRead",
    "ProjectTypeUpdate",
    "ProjectTypeList",
    "ReportTemplateCreate",
    "ReportTemplateRead",
    "ReportTemplateUpdate",
    "ReportTemplateList",
    "FieldValue",
    "ProjectSummary",
    "SubmissionSection",
    "ReportSubmissionCreate",
    "ReportSubmissionRead",
    "ReportSubmissionUpdate",
    "ReportSubmissionList",
    "ReviewDecision",
    "ReportStatistics",
]
