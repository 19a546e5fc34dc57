"""AssignmentListPage - assignment submission list (課題提出一覧).

DOM structure:
  table.listTable
    tbody tr -> td x4+: subject | title | due date | submission status
  .pagination / .pager / .page-nav
    a -> page numbers, .active/.current -> current page
  .result-count / .count-info / .total
    "1-20件 / 全50件" when no pager is rendered

Due dates arrive as "2025年7月10日 23:59" and are localized to
"2025-07-10 23:59". Status cells are classified by keyword.
"""

import math
import re

from bs4 import Tag

from src.unipa.builders import PaginationBuilder
from src.unipa.contracts import PageExtractor
from src.unipa.dates import format_datetime
from src.unipa.locators import select_all, select_first
from src.unipa.logging import get_logger
from src.unipa.models.assignments import (
    Assignment,
    AssignmentList,
    PaginationInfo,
    SubmissionStatus,
)
from src.unipa.tables import cell_texts, data_rows
from src.unipa.text import element_text, parse_int

log = get_logger(__name__)

_TOTAL_COUNT = re.compile(r"全\s*(\d+)\s*件")

# Page size assumed when pagination must be inferred from the total count
ITEMS_PER_PAGE = 20


class AssignmentListExtractor(PageExtractor[AssignmentList]):
    """課題提出一覧 - assignments with submission status and pagination."""

    PAGE_TYPE = "課題提出一覧"

    ASSIGNMENT_TABLE = "table.listTable"
    PAGER_CANDIDATES = (".pagination", ".pager", ".page-nav")
    CURRENT_PAGE_CANDIDATES = (".active", ".current")
    COUNT_CANDIDATES = (".result-count", ".count-info", ".total")

    def extract(self, document: Tag) -> AssignmentList:
        assignments = self.extract_assignments(document)
        pagination = self.extract_pagination(document)
        log.info(
            "assignments_extracted",
            assignments=len(assignments),
            total_pages=pagination.total_pages if pagination else None,
        )
        return AssignmentList(assignments=assignments, pagination=pagination)

    def extract_assignments(self, document: Tag) -> list[Assignment]:
        table = select_first(document, self.ASSIGNMENT_TABLE)
        if table is None:
            self.debug("assignment_table_missing")
            return []

        assignments: list[Assignment] = []
        for cells in data_rows(table, 4):
            subject, title, due, status = cell_texts(cells[:4])
            assignments.append(
                Assignment(
                    subject_name=subject,
                    assignment_title=title,
                    due_date=format_datetime(due),
                    submission_status=SubmissionStatus.from_text(status),
                )
            )
        return assignments

    def extract_pagination(self, document: Tag) -> PaginationInfo | None:
        """Pager links first, then the "全N件" count, else None."""
        pager = select_first(document, self.PAGER_CANDIDATES)
        if pager is not None:
            pages = [
                number
                for number in (parse_int(element_text(a)) for a in select_all(pager, "a"))
                if number is not None
            ]
            if pages:
                active = select_first(pager, self.CURRENT_PAGE_CANDIDATES)
                current = parse_int(element_text(active), 1) if active is not None else 1
                current = max(current, 1)
                # The active page is often a <span>, not one of the links
                total = max(pages + [current])
                return PaginationBuilder().pages(current, total).build()

        return self._pagination_from_count(document)

    def _pagination_from_count(self, document: Tag) -> PaginationInfo | None:
        element = select_first(document, self.COUNT_CANDIDATES)
        if element is None:
            return None
        match = _TOTAL_COUNT.search(element_text(element))
        if not match:
            return None
        total_pages = math.ceil(int(match.group(1)) / ITEMS_PER_PAGE)
        self.debug("pagination_inferred_from_count", total_pages=total_pages)
        return PaginationBuilder().pages(1, total_pages).build()
