"""Timetable pages.

Course offering list (学科開講一覧, list view) DOM:
  #form1:table2 (required)
    tbody tr -> td x5+: day/period | class code | subject (optionally <a>) | teacher | classroom
  "2025年度 前期" anywhere in the page text      opening year and term
  .studentInfo / .userInfo / .infoLabel          student info label

Rows whose day/period contains "集中" are intensive courses and are
returned separately from the weekly classes. The calendar views and the
student and teacher timetables are recognised but not extracted yet.
"""

import re

from bs4 import Tag

from src.unipa.contracts import NotImplementedExtractor, PageExtractor
from src.unipa.locators import first_with_text, require_id, select_one
from src.unipa.logging import get_logger
from src.unipa.models.timetable import CourseTimetableEntry, CourseTimetableList, DisplayFormat
from src.unipa.tables import cell_texts, data_rows
from src.unipa.text import element_text, normalize_spaces, optional_text

log = get_logger(__name__)

INTENSIVE_MARK = "集中"

_OPENING_TERM = re.compile(r"(\d{4})\s*年度\s*([^\s/／]+期)")


class CourseTimetableListExtractor(PageExtractor[CourseTimetableList]):
    """学科開講一覧 (list view) - weekly and intensive course rows."""

    PAGE_TYPE = "学科開講一覧 表示形式：一覧"

    MAIN_TABLE = "form1:table2"
    LABEL_CANDIDATES = (".studentInfo", ".userInfo", ".infoLabel")

    def extract(self, document: Tag) -> CourseTimetableList:
        table = require_id(document, self.MAIN_TABLE, "メインテーブル")
        entries = [self.course_entry(cells) for cells in data_rows(table, 5)]
        regular = [e for e in entries if INTENSIVE_MARK not in e.day_and_period]
        intensive = [e for e in entries if INTENSIVE_MARK in e.day_and_period]

        year, term = self.extract_opening_term(document)
        timetable = CourseTimetableList(
            student_info_label=optional_text(element_text(first_with_text(document, self.LABEL_CANDIDATES))),
            opening_year=year,
            semester=term,
            display_format=DisplayFormat.LIST,
            classes=regular,
            irregular_classes=intensive,
        )
        log.info("course_timetable_extracted", classes=len(regular), intensive=len(intensive))
        return timetable

    def course_entry(self, cells: list[Tag]) -> CourseTimetableEntry:
        day_period, class_code, _, teacher, classroom = cell_texts(cells[:5])
        link = select_one(cells[2], "a")
        return CourseTimetableEntry(
            day_and_period=day_period,
            class_code=class_code,
            subject_name=element_text(link if link is not None else cells[2]),
            teacher_name=teacher,
            classroom=optional_text(classroom),
        )

    def extract_opening_term(self, document: Tag) -> tuple[int | None, str | None]:
        match = _OPENING_TERM.search(normalize_spaces(document.get_text(" ")))
        if not match:
            self.debug("opening_term_missing")
            return None, None
        return int(match.group(1)), match.group(2)


class CourseTimetableCalendarExtractor(NotImplementedExtractor):
    PAGE_TYPE = "学科開講一覧 表示形式：カレンダー"
    OPERATION = "Course timetable calendar view parsing"


class StudentTimetableListExtractor(NotImplementedExtractor):
    PAGE_TYPE = "学生時間割表 表示形式：一覧"
    OPERATION = "Student timetable list view parsing"


class StudentTimetableCalendarExtractor(NotImplementedExtractor):
    PAGE_TYPE = "学生時間割表 表示形式：カレンダー"
    OPERATION = "Student timetable calendar view parsing"


class TeacherTimetableSearchExtractor(NotImplementedExtractor):
    PAGE_TYPE = "教員時間割検索"
    OPERATION = "Teacher timetable search parsing"


class TeacherTimetableListExtractor(NotImplementedExtractor):
    PAGE_TYPE = "教員時間割表 表示形式：一覧"
    OPERATION = "Teacher timetable list view parsing"


class TeacherTimetableCalendarExtractor(NotImplementedExtractor):
    PAGE_TYPE = "教員時間割表 表示形式：カレンダー"
    OPERATION = "Teacher timetable calendar view parsing"
