"""Records for the questionnaire list (アンケート一覧)."""

from typing import Self

from pydantic import Field

from src.unipa.models.base import Record, RecordEnum
from src.unipa.text import classify_by_keywords


class ResponseStatus(RecordEnum):
    NOT_ANSWERED = "not_answered"
    ANSWERED = "answered"
    EXPIRED = "expired"

    @classmethod
    def from_text(cls, text: str) -> "ResponseStatus":
        return classify_by_keywords(
            text,
            (
                (("未回答",), cls.NOT_ANSWERED),
                (("回答済",), cls.ANSWERED),
                (("期限切れ",), cls.EXPIRED),
            ),
            cls.default(),
        )


class LinkParameter(Record):
    name: str = ""
    value: str = ""


class QuestionnaireLink(Record):
    url: str = ""
    parameters: list[LinkParameter] = Field(default_factory=list)
    is_active: bool = False


class QuestionnaireItem(Record):
    title: str = ""
    subject_name: str | None = None
    instructor_name: str | None = None  # not rendered by the list view
    deadline: str = ""
    response_status: ResponseStatus = ResponseStatus.NOT_ANSWERED
    questionnaire_link: QuestionnaireLink = Field(default_factory=QuestionnaireLink)


class QuestionnairePagination(Record):
    current_page: int = 1
    total_pages: int = 1
    total_count: int = 0  # not rendered; kept at 0
    next_page_link: str | None = None
    previous_page_link: str | None = None

    @classmethod
    def of(cls, current_page: int, total_pages: int) -> Self:
        """Pagination with "#" placeholder links wherever a neighbour page exists."""
        return cls(
            current_page=current_page,
            total_pages=total_pages,
            next_page_link="#" if current_page < total_pages else None,
            previous_page_link="#" if current_page > 1 else None,
        )


class QuestionnaireList(Record):
    questionnaires: list[QuestionnaireItem] = Field(default_factory=list)
    pagination: QuestionnairePagination | None = None
