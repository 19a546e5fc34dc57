"""Records for the assignment submission list (課題提出一覧)."""

from pydantic import Field

from src.unipa.models.base import Record, RecordEnum
from src.unipa.text import classify_by_keywords


class SubmissionStatus(RecordEnum):
    NOT_SUBMITTED = "not_submitted"
    SUBMITTED = "submitted"
    OVERDUE = "overdue"
    EVALUATED = "evaluated"

    @classmethod
    def from_text(cls, text: str) -> "SubmissionStatus":
        return classify_by_keywords(
            text,
            (
                (("未提出",), cls.NOT_SUBMITTED),
                (("提出済",), cls.SUBMITTED),
                (("期限切れ",), cls.OVERDUE),
                (("評価済",), cls.EVALUATED),
            ),
            cls.default(),
        )


class Assignment(Record):
    subject_name: str = ""
    assignment_title: str = ""
    due_date: str = ""  # "YYYY-MM-DD HH:MM", or the raw text when unrecognised
    submission_status: SubmissionStatus = SubmissionStatus.NOT_SUBMITTED
    # Detail-page fields; the list view does not render them
    description: str | None = None
    has_attachment: bool = False
    submitted_file_name: str | None = None
    submission_date: str | None = None
    teacher_comment: str | None = None
    score: int | None = None


class PaginationInfo(Record):
    current_page: int = 1
    total_pages: int = 0
    has_previous: bool = False
    has_next: bool = False


class AssignmentList(Record):
    assignments: list[Assignment] = Field(default_factory=list)
    pagination: PaginationInfo | None = None
