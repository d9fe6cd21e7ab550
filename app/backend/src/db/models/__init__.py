from src.db.models.project import Project
from src.db.models.project_type import ProjectType
from src.db.models.report_submission import ReportSubmission, SubmissionStatus
from src.db.models.report_template import ReportTemplate

__all__ = [
    "Project",
    "ProjectType",
    "ReportTemplate",
    "ReportSubmission",
    "SubmissionStatus",
]
