"""StudentInfoPage - student register inquiry (学籍情報照会).

DOM structure:
  table#baseTable                       basic information (required)
    tr -> th label | td value
  .subTitleArea "所属情報"  + next table  affiliation
  .subTitleArea "担当教員"  + next table  advisor
  .subTitleArea "異動情報"  + next table  status history ("学籍状況", <BR>-separated)

Rows are matched by exact header label; unknown labels are ignored. Dates
are localized to YYYY-MM-DD (YYYY-MM for the expected graduation month).
"""

from collections.abc import Callable
from typing import Any

from bs4 import Tag

from src.unipa.contracts import PageExtractor
from src.unipa.dates import format_date, format_year_month
from src.unipa.locators import by_id, require, select_all, select_one
from src.unipa.logging import get_logger
from src.unipa.models.student_info import (
    AdvisorInfo,
    AffiliationInfo,
    BasicInfo,
    StatusChangeInfo,
    StudentInfo,
)
from src.unipa.tables import header_value_cells
from src.unipa.text import cell_lines, element_text, optional_text, parse_int

log = get_logger(__name__)

SECTION_HEADING = ".subTitleArea"


def _text(cell: Tag) -> str:
    return " ".join(cell_lines(cell)).strip()


def _int(cell: Tag) -> int:
    return parse_int(_text(cell), 0)


def _optional(cell: Tag) -> str | None:
    return optional_text(_text(cell))


def _date(cell: Tag) -> str:
    return format_date(_text(cell))


def _optional_date(cell: Tag) -> str | None:
    value = _text(cell)
    return format_date(value) if value else None


def _year_month(cell: Tag) -> str:
    return format_year_month(_text(cell))


def _multiline(cell: Tag) -> str:
    return "\n".join(line for line in cell_lines(cell) if line)


def _lines(cell: Tag) -> list[str]:
    return [line for line in cell_lines(cell) if line]


Decoder = Callable[[Tag], Any]

# Header label -> (field, decoder); labels are matched exactly
BASIC_FIELDS: dict[str, tuple[str, Decoder]] = {
    "学籍番号": ("student_id", _text),
    "学生氏名": ("student_name", _text),
    "カナ氏名": ("kana_name", _text),
    "性別": ("gender", _text),
    "生年月日": ("date_of_birth", _date),
    "国籍": ("nationality", _optional),
    "PCメールアドレス": ("pc_email_address", _optional),
    "入学種別": ("enrollment_type", _text),
    "就学種別": ("student_status_type", _text),
    "入学年度": ("enrollment_year", _int),
    "入学期NO": ("enrollment_term_no", _int),
    "カリキュラム対象年度": ("curriculum_target_year", _int),
    "カリキュラム対象学期": ("curriculum_target_term", _int),
    "入学日付": ("enrollment_date", _date),
    "出学日付": ("withdrawal_date", _optional_date),
    "卒業予定年月": ("expected_graduation_month_year", _year_month),
    "修了予定日": ("completion_date", _optional_date),
}
AFFILIATION_FIELDS: dict[str, tuple[str, Decoder]] = {
    "所属学科組織": ("affiliated_department_organization", _text),
    "カリキュラム学科組織": ("curriculum_department_organization", _text),
    "学年": ("grade_level", _int),
    "セメスタ": ("semester", _int),
    "専攻コース": ("major_course", _optional),
    "クラス種別＋クラス": ("class_type_class", _multiline),
}
ADVISOR_FIELDS: dict[str, tuple[str, Decoder]] = {
    "担当教員名": ("advisor_name", _text),
    "担当開始日": ("advisor_start_date", _date),
    "担当終了日": ("advisor_end_date", _date),
}
STATUS_FIELDS: dict[str, tuple[str, Decoder]] = {
    "学籍状況": ("academic_status_history", _lines),
}


def decode_fields(table: Tag | None, fields: dict[str, tuple[str, Decoder]]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    if table is None:
        return values
    for label, cell in header_value_cells(table):
        if label in fields:
            name, decode = fields[label]
            values[name] = decode(cell)
    return values


def table_after_heading(document: Tag, title: str) -> Tag | None:
    """First table following the section heading whose text is title."""
    for heading in select_all(document, SECTION_HEADING):
        if element_text(heading) != title:
            continue
        for sibling in heading.find_next_siblings():
            if sibling.name == "table" or select_one(sibling, "tr") is not None:
                return sibling
        return None
    return None


class StudentInfoExtractor(PageExtractor[StudentInfo]):
    """学籍情報照会 - basic, affiliation, advisor and status change sections."""

    PAGE_TYPE = "学籍情報照会"

    BASE_TABLE = "baseTable"

    def extract(self, document: Tag) -> StudentInfo:
        base_table = require(document, by_id(self.BASE_TABLE), "基本情報テーブル")
        info = StudentInfo(
            basic_info=BasicInfo(**decode_fields(base_table, BASIC_FIELDS)),
            affiliation_info=AffiliationInfo(**self.section(document, "所属情報", AFFILIATION_FIELDS)),
            advisor_info=AdvisorInfo(**self.section(document, "担当教員", ADVISOR_FIELDS)),
            status_change_info=StatusChangeInfo(**self.section(document, "異動情報", STATUS_FIELDS)),
        )
        log.info("student_info_extracted", student_id=info.basic_info.student_id)
        return info

    def section(self, document: Tag, title: str, fields: dict[str, tuple[str, Decoder]]) -> dict[str, Any]:
        table = table_after_heading(document, title)
        if table is None:
            self.debug("student_info_section_missing", section=title)
        return decode_fields(table, fields)
