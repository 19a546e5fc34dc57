"""Syllabus pages: search form, search result list and syllabus view.

Search result DOM (JSF ids):
  #form1:htmlKensakuJyoken                      criteria, one "label：value" per <br> line (required)
  #form1:htmlKekkatable:htmlGokeiKensu          "123件" (required)
  #form1:htmlKekkatable:deluxe1__pagerText      "1/7 ページ" (required)
  #form1:htmlKekkatable tbody tr.rowClass1      result rows
    td.yobi td.kamokuName>a>span td.kyoin td.kubun td.gakunen td.gakki td.tani
  #form1:htmlKekkatable:web1 strong             current page number
  #form1:htmlKekkatable:deluxe1__pager{First,Previous,Next,Last}   disabled attr
  form#form1                                    action / method / enctype / hidden inputs (required)

Syllabus view DOM:
  tr -> th header | td value   (the Nth <th> of a row pairs with the Nth <td>)
  tr -> th "第N回" | td plan | td outside-class tasks

Only a row's own cells are read, so layout tables wrapping the syllabus
never pair a header with a value from a nested table.
"""

import re
from collections.abc import Callable
from typing import Any

from bs4 import Tag

from src.unipa.contracts import PageExtractor
from src.unipa.errors import DataParsingFailed, ElementNotFound
from src.unipa.locators import attr, by_id, require, require_id, select_all, select_one
from src.unipa.logging import get_logger
from src.unipa.models.syllabus import (
    ActiveLearning,
    CourseEntry,
    FormInfo,
    HiddenField,
    LessonPlanItem,
    PagerButtons,
    ResultMetadata,
    SearchConditions,
    SyllabusLink,
    SyllabusSearchForm,
    SyllabusSearchResult,
    SyllabusView,
)
from src.unipa.text import (
    cell_lines,
    element_text,
    is_placeholder,
    optional_text,
    parse_int,
)

log = get_logger(__name__)


# --- search form ----------------------------------------------------------

# Input name fragment (lowercased, "_" removed) -> (field, converter); first match wins
SEARCH_FORM_FIELDS: tuple[tuple[tuple[str, ...], str, Callable[[str], Any]], ...] = (
    (("kanribsyo",), "managing_department", str),
    (("nendo",), "academic_year", parse_int),
    (("gakki",), "semester_no", str),
    (("kamokjugyo", "jugyocd"), "class_code", str),
    (("kamokname", "kamokunm"), "subject_name", str),
    (("kyoin",), "instructor_name", str),
    (("gakka",), "department", str),
    (("gakunen",), "grade_year", str),
    (("yobi",), "day_of_week", str),
    (("jigen",), "period", str),
    (("keyword",), "keyword", str),
    (("shikibetsu",), "classification", parse_int),
    (("kanrino",), "management_no", parse_int),
)
INTENSIVE_FIELD = "syutyu"


def _form_field(name: str) -> tuple[str, Callable[[str], Any]] | None:
    key = name.lower().replace("_", "")
    for fragments, field, convert in SEARCH_FORM_FIELDS:
        if any(fragment in key for fragment in fragments):
            return field, convert
    return None


class SyllabusSearchFormExtractor(PageExtractor[SyllabusSearchForm]):
    """syllabus_search - the conditions currently filled into the search form.

    Text inputs contribute their value, selects their selected option and
    the intensive-course checkbox its checked state. Empty values stay None.
    """

    PAGE_TYPE = "syllabus_search"

    def extract(self, document: Tag) -> SyllabusSearchForm:
        values: dict[str, Any] = {}
        for element in select_all(document, "input[name], select[name]"):
            name = attr(element, "name")
            if INTENSIVE_FIELD in name.lower():
                if attr(element, "type") == "checkbox":
                    values["intensive"] = element.has_attr("checked")
                continue
            if attr(element, "type") in ("submit", "button", "image"):
                continue

            match = _form_field(name)
            if match is None:
                continue
            field, convert = match
            if element.name == "select":
                raw = attr(select_one(element, "option[selected]"), "value")
            else:
                raw = attr(element, "value")
            if raw.strip() and field not in values:
                values[field] = convert(raw.strip())

        form = SyllabusSearchForm(**{k: v for k, v in values.items() if v is not None})
        log.info("syllabus_search_form_extracted", fields=len(form.model_dump(exclude_none=True)))
        return form


# --- search result --------------------------------------------------------

CRITERIA = "form1:htmlKensakuJyoken"
RESULT_TABLE = "form1:htmlKekkatable"
TOTAL_COUNT = "form1:htmlKekkatable:htmlGokeiKensu"
PAGER_TEXT = "form1:htmlKekkatable:deluxe1__pagerText"
CURRENT_PAGE = "form1:htmlKekkatable:web1"
PAGER_BUTTON = "form1:htmlKekkatable:deluxe1__pager{}"
RESULT_FORM = "form1"

CRITERIA_LABELS = (
    ("開講年度／学期：", "academic_year_semester"),
    ("科目名：", "subject_name"),
    ("学科・コース／専攻：", "department_course"),
)

_PAGER_TEXT = re.compile(r"(\d+)\s*/\s*(\d+)")


def _span_text(row: Tag, cell_class: str) -> str:
    span = select_one(row, f"td.{cell_class} span")
    return " ".join(cell_lines(span)) if span is not None else ""


def _button_enabled(document: Tag, name: str) -> bool:
    button = select_one(document, by_id(PAGER_BUTTON.format(name)))
    return button is not None and not button.has_attr("disabled")


class SyllabusSearchResultExtractor(PageExtractor[SyllabusSearchResult]):
    """シラバス検索結果 - criteria, counts, result rows, pager and form state."""

    PAGE_TYPE = "シラバス検索結果"

    def extract(self, document: Tag) -> SyllabusSearchResult:
        result = SyllabusSearchResult(
            search_conditions=self.extract_search_conditions(document),
            result_metadata=self.extract_result_metadata(document),
            course_entries=self.extract_course_entries(document),
            pagination=self.extract_pager(document),
            form_info=self.extract_form_info(document),
        )
        log.info(
            "syllabus_search_result_extracted",
            total_count=result.result_metadata.total_count,
            entries=len(result.course_entries),
        )
        return result

    def extract_search_conditions(self, document: Tag) -> SearchConditions:
        element = require_id(document, CRITERIA, "検索条件要素が見つかりません")
        values: dict[str, str] = {}
        for line in cell_lines(element):
            for label, field in CRITERIA_LABELS:
                if line.startswith(label):
                    values[field] = line[len(label) :].strip()
                    break
        return SearchConditions(
            academic_year_semester=values.get("academic_year_semester", ""),
            subject_name=optional_text(values.get("subject_name")),
            department_course=optional_text(values.get("department_course")),
        )

    def extract_result_metadata(self, document: Tag) -> ResultMetadata:
        count_text = element_text(require_id(document, TOTAL_COUNT, "総件数要素が見つかりません"))
        total_count = parse_int(count_text.replace("件", ""))
        if total_count is None:
            raise DataParsingFailed("total count", count_text, selector=by_id(TOTAL_COUNT))

        pager_text = element_text(require_id(document, PAGER_TEXT, "ページ情報要素が見つかりません"))
        current_page = total_pages = 1
        match = _PAGER_TEXT.search(pager_text)
        if match:
            current_page, total_pages = int(match.group(1)), int(match.group(2))
        return ResultMetadata(total_count=total_count, current_page=current_page, total_pages=total_pages)

    def extract_course_entries(self, document: Tag) -> list[CourseEntry]:
        entries: list[CourseEntry] = []
        for row in select_all(document, f"{by_id(RESULT_TABLE)} tbody tr.rowClass1"):
            entry = self.course_entry(row)
            if entry.course_code_and_name.strip():
                entries.append(entry)
            else:
                self.debug("syllabus_row_without_subject_skipped")
        return entries

    def course_entry(self, row: Tag) -> CourseEntry:
        link = select_one(row, "td.kamokuName a")
        name = element_text(select_one(link, "span")) if link is not None else ""
        grade = _span_text(row, "gakunen")
        return CourseEntry(
            schedule_day_period=_span_text(row, "yobi"),
            course_code_and_name=name,
            instructor_names=_span_text(row, "kyoin"),
            course_type=_span_text(row, "kubun"),
            target_grade=None if is_placeholder(grade) else grade,
            semester=_span_text(row, "gakki"),
            credits=_span_text(row, "tani"),
            syllabus_link=SyllabusLink(
                link_id=attr(link, "id"),
                onclick_action=attr(link, "onclick"),
                is_active=link is not None,
            ),
        )

    def extract_pager(self, document: Tag) -> PagerButtons:
        current = select_one(document, f"{by_id(CURRENT_PAGE)} strong")
        return PagerButtons(
            first_button_enabled=_button_enabled(document, "First"),
            previous_button_enabled=_button_enabled(document, "Previous"),
            next_button_enabled=_button_enabled(document, "Next"),
            last_button_enabled=_button_enabled(document, "Last"),
            page_display_text=element_text(select_one(document, by_id(PAGER_TEXT))),
            current_page_number=parse_int(element_text(current), 1),
        )

    def extract_form_info(self, document: Tag) -> FormInfo:
        form = require(document, by_id(RESULT_FORM), "フォーム要素が見つかりません")
        hidden = [
            HiddenField(field_name=attr(i, "name"), field_value=attr(i, "value"))
            for i in select_all(form, 'input[type="hidden"]')
            if attr(i, "name")
        ]
        return FormInfo(
            form_action=attr(form, "action"),
            form_method=attr(form, "method"),
            form_enctype=attr(form, "enctype"),
            hidden_fields=hidden,
        )


# --- syllabus view --------------------------------------------------------

# Header text -> SyllabusView field
REQUIRED_TEXT_FIELDS = {
    "科目名": "subject_name",
    "年度学期": "academic_year_semester",
    "曜日時限": "day_period",
    "対象学科": "target_department",
    "科目区分": "subject_category",
    "必選の別": "required_elective_distinction",
    "担当者": "instructor",
}
REQUIRED_INT_FIELDS = {
    "授業コード": "lesson_code",
    "配当学年": "assigned_grade",
    "単位数": "credits",
}
OPTIONAL_FIELDS = {
    "オムニバス": "omnibus",
    "コース": "course",
    "教室": "classroom",
    "実務家教員担当授業": "industry_professional_led_class",
    "授業の目的と進め方": "class_objectives_and_approach",
    "課題等に対するフィードバック": "feedback_on_assignments",
    "評価方法と基準": "evaluation_methods_and_criteria",
    "テキスト": "textbook",
    "参考図書": "reference_books",
    "科目の位置づけ（学習・教育目標との対応）": "subject_positioning",
    "履修登録前の準備": "preparation_before_registration",
}
ACHIEVEMENT_GOALS = tuple(f"達成目標{n}" for n in "１２３４５６７")
ACTIVE_LEARNING_ITEMS = {
    "ディスカッション": "discussion",
    "ディベート": "debate",
    "グループワーク": "group_work",
    "プレゼンテーション": "presentation",
    "実習": "practical_training",
    "フィールドワーク": "field_work",
    "その他課題解決型学習": "other_problem_solving_learning",
}
ACTIVE_LEARNING_MARK = "◎"


def own_cells(row: Tag, name: str) -> list[Tag]:
    return row.find_all(name, recursive=False)


def header_cells(document: Tag) -> dict[str, Tag | None]:
    """Map each header text to the <td> at the same index in its row.

    The first occurrence of a header wins. A header without a matching
    <td> maps to None.
    """
    cells: dict[str, Tag | None] = {}
    for row in select_all(document, "tr"):
        headers = own_cells(row, "th")
        values = own_cells(row, "td")
        for index, header in enumerate(headers):
            label = element_text(header)
            if label and label not in cells:
                cells[label] = values[index] if index < len(values) else None
    return cells


class SyllabusViewExtractor(PageExtractor[SyllabusView]):
    """syllabus_view - header/value table lookup over the whole syllabus."""

    PAGE_TYPE = "syllabus_view"

    def extract(self, document: Tag) -> SyllabusView:
        cells = header_cells(document)

        def value(header: str) -> str | None:
            cell = cells.get(header)
            return optional_text("\n".join(cell_lines(cell))) if cell is not None else None

        def required(header: str) -> str:
            text = value(header)
            if text is None:
                raise ElementNotFound(f"table value for '{header}'", "syllabus table")
            return text

        fields: dict[str, Any] = {field: required(header) for header, field in REQUIRED_TEXT_FIELDS.items()}
        for header, field in REQUIRED_INT_FIELDS.items():
            text = required(header)
            number = parse_int(text)
            if number is None:
                raise DataParsingFailed(header, text, field=field)
            fields[field] = number
        fields.update({field: value(header) for header, field in OPTIONAL_FIELDS.items()})

        view = SyllabusView(
            **fields,
            achievement_goals=[goal for goal in map(value, ACHIEVEMENT_GOALS) if goal],
            active_learning=ActiveLearning(
                **{
                    field: ACTIVE_LEARNING_MARK in (value(header) or "")
                    for header, field in ACTIVE_LEARNING_ITEMS.items()
                }
            ),
            lesson_plan_details=self.extract_lesson_plan(document),
        )
        log.info("syllabus_view_extracted", lesson_code=view.lesson_code, sessions=len(view.lesson_plan_details))
        return view

    def extract_lesson_plan(self, document: Tag) -> list[LessonPlanItem]:
        items: list[LessonPlanItem] = []
        for row in select_all(document, "tr"):
            session = next(
                (
                    text
                    for text in (element_text(th) for th in own_cells(row, "th"))
                    if "第" in text and "回" in text
                ),
                None,
            )
            if session is None:
                continue
            values = own_cells(row, "td")
            plan = tasks = ""
            if len(values) >= 2:
                plan, tasks = ("\n".join(cell_lines(cell)) for cell in values[:2])
            items.append(LessonPlanItem(session_number=session, lesson_plan=plan, outside_class_tasks=tasks))
        return items
