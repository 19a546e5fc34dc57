"""QuestionnaireListPage - questionnaire list (アンケート一覧).

DOM structure:
  table.listTable
    tbody tr -> td x4+: title | subject | deadline | response status
  .pagination / .pager / .page-nav / .page-list
    a, span -> page numbers; a <span> or .active/.current marks the current page
  input[type=hidden][name*=currentPage|pageNo|totalPages|maxPage]
    pagination state when no pager is rendered
"""

from bs4 import Tag

from src.unipa.contracts import PageExtractor
from src.unipa.locators import attr, select_all, select_first
from src.unipa.logging import get_logger
from src.unipa.models.questionnaire import (
    QuestionnaireItem,
    QuestionnaireList,
    QuestionnairePagination,
    ResponseStatus,
)
from src.unipa.tables import cell_texts, data_rows
from src.unipa.text import element_text, optional_text, parse_int

log = get_logger(__name__)

CURRENT_PAGE_FIELDS = ("currentPage", "pageNo")
TOTAL_PAGES_FIELDS = ("totalPages", "maxPage")


def _is_current_page(element: Tag) -> bool:
    classes = attr(element, "class")
    return element.name == "span" or "active" in classes or "current" in classes


class QuestionnaireListExtractor(PageExtractor[QuestionnaireList]):
    """アンケート一覧 - questionnaires with response status and pagination."""

    PAGE_TYPE = "アンケート一覧"

    LIST_TABLE = "table.listTable"
    PAGER_CANDIDATES = (".pagination", ".pager", ".page-nav", ".page-list")

    def extract(self, document: Tag) -> QuestionnaireList:
        items = self.extract_questionnaires(document)
        pagination = self.extract_pagination(document)
        log.info("questionnaires_extracted", questionnaires=len(items))
        return QuestionnaireList(questionnaires=items, pagination=pagination)

    def extract_questionnaires(self, document: Tag) -> list[QuestionnaireItem]:
        table = select_first(document, self.LIST_TABLE)
        if table is None:
            self.debug("questionnaire_table_missing")
            return []

        items: list[QuestionnaireItem] = []
        for cells in data_rows(table, 4):
            title, subject, deadline, status = cell_texts(cells[:4])
            items.append(
                QuestionnaireItem(
                    title=title,
                    subject_name=optional_text(subject),
                    deadline=deadline,
                    response_status=ResponseStatus.from_text(status),
                )
            )
        return items

    def extract_pagination(self, document: Tag) -> QuestionnairePagination | None:
        """Pager numbers first, then hidden form state, else None."""
        pager = select_first(document, self.PAGER_CANDIDATES)
        if pager is not None:
            current = 1
            pages: list[int] = []
            for element in select_all(pager, "a, span"):
                number = parse_int(element_text(element))
                if number is None:
                    continue
                pages.append(number)
                if _is_current_page(element):
                    current = number
            if pages:
                return QuestionnairePagination.of(max(current, 1), max(pages + [current]))

        return self._pagination_from_form(document)

    def _pagination_from_form(self, document: Tag) -> QuestionnairePagination | None:
        current = total = 1
        for hidden in select_all(document, 'input[type="hidden"][name]'):
            name = attr(hidden, "name")
            if any(field in name for field in CURRENT_PAGE_FIELDS):
                current = parse_int(attr(hidden, "value"), 1)
            elif any(field in name for field in TOTAL_PAGES_FIELDS):
                total = parse_int(attr(hidden, "value"), 1)

        if total > 1 or current > 1:
            self.debug("pagination_from_hidden_fields", current_page=current, total_pages=total)
            return QuestionnairePagination.of(max(current, 1), max(total, current))
        return None
