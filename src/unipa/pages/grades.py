"""Grade pages: 成績照会, 卒業見込判定, 進級見込判定, 免許取得見込判定.

Grade inquiry DOM (list view):
  table.listTable
    tbody tr -> td x5+: subject | credits | grade label | instructor | ...
  .gpaScore / .gpa / #gpaValue     "GPA: 3.50" (not always rendered)
  table.creditSummary / .creditTable / .unitTable
    tr -> td|th x4+: category | required | completed | currently enrolled

When the GPA element is missing, GPA is computed from the subject rows
(credit-weighted grade points). When the credit table is missing, the
overall credit status is computed from the same rows.

Prediction pages render a single judgement message, plus a table of unmet
requirements (graduation) or hidden form state (promotion).
"""

import re

from bs4 import Tag

from src.unipa.builders import GradeInquiryBuilder
from src.unipa.config import ExtractorOptions
from src.unipa.contracts import NotImplementedExtractor, PageExtractor
from src.unipa.locators import input_value, select_first
from src.unipa.logging import get_logger
from src.unipa.models.grades import (
    GRADE_POINTS,
    CategoryCredits,
    CreditDetails,
    CreditSummary,
    DisplayPattern,
    DisplaySettings,
    Grade,
    GradeInquiry,
    GraduationPrediction,
    PromotionPrediction,
    ShortfallItem,
    Subject,
)
from src.unipa.tables import cell_texts, data_rows
from src.unipa.text import element_text, parse_int

log = get_logger(__name__)

_GPA_VALUE = re.compile(r"(\d+\.\d+)")

# Typical graduation requirement, used only for the computed summary
DEFAULT_REQUIRED_CREDITS = 124

JUDGEMENT_MESSAGE = (".result-message", ".judgement-message", ".message")
JUDGEMENT_UNAVAILABLE = "判定結果を取得できませんでした。"


def judgement_message(document: Tag) -> str:
    """Judgement text of a prediction page, or the unavailable placeholder."""
    element = select_first(document, JUDGEMENT_MESSAGE)
    if element is None:
        log.debug("judgement_message_missing")
        return JUDGEMENT_UNAVAILABLE
    return element_text(element)


class GradeInquiryExtractor(PageExtractor[GradeInquiry]):
    """成績照会 - subject grades, GPA and credit status."""

    PAGE_TYPE = "成績照会"

    SUBJECT_TABLE = "table.listTable"
    SUBJECT_ROWS = "tbody tr"
    GPA_CANDIDATES = (".gpaScore", ".gpa", "#gpaValue")
    CREDIT_TABLE_CANDIDATES = ("table.creditSummary", ".creditTable", ".unitTable")

    def __init__(
        self,
        options: ExtractorOptions | None = None,
        *,
        display_pattern: DisplayPattern | None = None,
        display_settings: DisplaySettings | None = None,
    ) -> None:
        super().__init__(options)
        self.display_pattern = display_pattern or DisplayPattern()
        self.display_settings = display_settings or DisplaySettings()

    def extract(self, document: Tag) -> GradeInquiry:
        subjects = self.extract_subjects(document)
        gpa = self.read_gpa_summary(document)
        if gpa is None:
            gpa = self.compute_gpa(document)
            self.debug("gpa_computed_from_subjects", gpa=gpa)
        credit_summary = self.extract_credit_summary(document)

        record = (
            GradeInquiryBuilder()
            .set(display_pattern=self.display_pattern, display_settings=self.display_settings)
            .set(subjects=subjects, gpa_score=gpa, credit_summary=credit_summary)
            .build()
        )
        log.info(
            "grades_extracted",
            subjects=len(subjects),
            gpa=gpa,
            total_credits=credit_summary.overall.total_credits,
        )
        return record

    def _subject_rows(self, document: Tag, min_cells: int) -> list[list[Tag]]:
        table = select_first(document, self.SUBJECT_TABLE)
        if table is None:
            return []
        return list(data_rows(table, min_cells, self.SUBJECT_ROWS))

    def extract_subjects(self, document: Tag) -> list[Subject]:
        subjects: list[Subject] = []
        for cells in self._subject_rows(document, min_cells=5):
            name, credits, grade_label, instructor = cell_texts(cells[:4])
            subjects.append(
                Subject(
                    name=name,
                    credit_count=parse_int(credits),
                    grade=Grade.from_label(grade_label),
                    instructor_name=instructor,
                )
            )
        return subjects

    def read_gpa_summary(self, document: Tag) -> float | None:
        """GPA as rendered on the page, or None when no summary element exists."""
        element = select_first(document, self.GPA_CANDIDATES)
        if element is None:
            return None
        match = _GPA_VALUE.search(element_text(element))
        if not match:
            return None
        return float(match.group(1))

    def compute_gpa(self, document: Tag) -> float:
        """Credit-weighted GPA over rows with numeric credits and a positive grade point."""
        total_points = 0.0
        total_credits = 0
        for cells in self._subject_rows(document, min_cells=3):
            _, credit_text, grade_label = cell_texts(cells[:3])
            credits = parse_int(credit_text)
            if credits is None:
                continue
            point = GRADE_POINTS.get(grade_label, 0.0)
            if point > 0:
                total_points += point * credits
                total_credits += credits
        if total_credits == 0:
            return 0.0
        return total_points / total_credits

    def extract_credit_summary(self, document: Tag) -> CreditSummary:
        table = select_first(document, self.CREDIT_TABLE_CANDIDATES)
        if table is None:
            self.debug("credit_table_missing")
            return self.compute_credit_summary(document)

        overall = common = specialized = CreditDetails()
        breakdown: list[CategoryCredits] = []
        for cells in data_rows(table, 4, row_selectors="tr", cell_selector="td, th"):
            name, required, completed, current = cell_texts(cells[:4])
            details = CreditDetails.of(
                parse_int(required, 0), parse_int(completed, 0), parse_int(current, 0)
            )
            if "全体" in name or "合計" in name:
                overall = details
            elif "共通" in name or "教養" in name:
                common = details
            elif "専門" in name:
                specialized = details
            else:
                breakdown.append(CategoryCredits(category_name=name, credit_details=details))

        return CreditSummary(
            overall=overall,
            common_education=common,
            specialized_education=specialized,
            category_breakdown=breakdown,
        )

    def compute_credit_summary(self, document: Tag) -> CreditSummary:
        """Overall credit status from subject rows: no grade yet counts as enrolled."""
        completed = 0
        current = 0
        for cells in self._subject_rows(document, min_cells=3):
            _, credit_text, grade_label = cell_texts(cells[:3])
            credits = parse_int(credit_text)
            if credits is None:
                continue
            if grade_label in ("", "-"):
                current += credits
            elif "不可" not in grade_label:
                completed += credits
        return CreditSummary(
            overall=CreditDetails.of(DEFAULT_REQUIRED_CREDITS, completed, current)
        )


class GraduationPredictionExtractor(PageExtractor[GraduationPrediction]):
    """卒業見込判定 - judgement message and unmet requirements."""

    PAGE_TYPE = "卒業見込判定"

    SHORTFALL_TABLE_CANDIDATES = ("table.fusoku", ".requirements-table")

    def extract(self, document: Tag) -> GraduationPrediction:
        items: list[ShortfallItem] = []
        table = select_first(document, self.SHORTFALL_TABLE_CANDIDATES)
        if table is not None:
            for cells in data_rows(table, 4):
                code, number, message, amount = cell_texts(cells[:4])
                items.append(
                    ShortfallItem(
                        requirement_code=code,
                        element_number=parse_int(number, 0),
                        shortfall_message=message,
                        shortfall_amount=amount,
                    )
                )

        log.info("graduation_prediction_extracted", shortfall_items=len(items))
        return GraduationPrediction(
            judgement_message=judgement_message(document), shortfall_items=items
        )


class PromotionPredictionExtractor(PageExtractor[PromotionPrediction]):
    """進級見込判定 - judgement message plus hidden search state."""

    PAGE_TYPE = "進級見込判定"

    def extract(self, document: Tag) -> PromotionPrediction:
        record = PromotionPrediction(
            judgement_message=judgement_message(document),
            last_search_student_id=input_value(document, "lastSearchStudentId"),
            academic_year=input_value(document, "academicYear"),
            semester=input_value(document, "semester"),
        )
        log.info("promotion_prediction_extracted", academic_year=record.academic_year)
        return record


class LicensePredictionExtractor(NotImplementedExtractor):
    """免許取得見込判定 - page layout not yet mapped."""

    PAGE_TYPE = "免許取得見込判定"
    OPERATION = "license prediction extraction"
