import pytest

from src.unipa.errors import NotImplementedExtraction
from src.unipa.models.grades import DisplaySettings, Grade
from src.unipa.pages.grades import (
    DEFAULT_REQUIRED_CREDITS,
    JUDGEMENT_UNAVAILABLE,
    GradeInquiryExtractor,
    GraduationPredictionExtractor,
    LicensePredictionExtractor,
    PromotionPredictionExtractor,
)

SUBJECTS = """
<table class="listTable">
  <thead><tr><th>科目</th><th>単位</th><th>評価</th><th>教員</th><th>備考</th></tr></thead>
  <tbody>
    <tr><td>プログラミング基礎</td><td>2</td><td>秀</td><td>山田 太郎</td><td></td></tr>
    <tr><td>線形代数</td><td>2</td><td>良</td><td>佐藤 花子</td><td></td></tr>
  </tbody>
</table>
"""

CREDIT_TABLE = """
<table class="creditSummary">
  <tr><td>全体</td><td>124</td><td>60</td><td>20</td></tr>
  <tr><td>共通教育</td><td>30</td><td>20</td><td>4</td></tr>
  <tr><td>専門教育</td><td>94</td><td>40</td><td>16</td></tr>
  <tr><td>自由選択</td><td>0</td><td>2</td><td>0</td></tr>
</table>
"""


def grade_page(*parts):
    return "<html><body>" + "".join(parts) + "</body></html>"


def test_grade_inquiry_reads_subjects_and_gpa(parse, options):
    html = grade_page(SUBJECTS, '<div class="gpaScore">GPA: 3.50</div>')
    record = GradeInquiryExtractor(options).parse_document(parse(html))

    assert len(record.subjects) == 2
    first = record.subjects[0]
    assert first.name == "プログラミング基礎"
    assert first.credit_count == 2
    assert first.grade is Grade.AA
    assert first.instructor_name == "山田 太郎"
    assert record.gpa_score == 3.5


def test_gpa_above_four_keeps_the_record(parse, options):
    html = grade_page(SUBJECTS, '<div class="gpaScore">GPA: 4.30</div>')
    record = GradeInquiryExtractor(options).parse_document(parse(html))
    assert record.gpa_score == pytest.approx(4.3)
    assert [s.name for s in record.subjects] == ["プログラミング基礎", "線形代数"]


def test_gpa_is_computed_when_summary_missing(parse, options):
    record = GradeInquiryExtractor(options).parse_document(parse(grade_page(SUBJECTS)))
    # (4.0 * 2 + 2.0 * 2) / 4
    assert record.gpa_score == pytest.approx(3.0)


def test_rendered_and_computed_gpa_agree(parse, options):
    extractor = GradeInquiryExtractor(options)
    rendered = extractor.parse_document(parse(grade_page(SUBJECTS, '<span class="gpa">3.00</span>')))
    computed = extractor.parse_document(parse(grade_page(SUBJECTS)))
    assert rendered.gpa_score == pytest.approx(computed.gpa_score)


def test_credit_summary_is_computed_without_credit_table(parse, options):
    html = grade_page(
        SUBJECTS.replace("</tbody>", "<tr><td>英語</td><td>1</td><td></td><td>鈴木</td><td></td></tr></tbody>")
    )
    overall = GradeInquiryExtractor(options).parse_document(parse(html)).credit_summary.overall
    assert overall.required_for_graduation == DEFAULT_REQUIRED_CREDITS
    assert overall.completed_credits == 4
    assert overall.currently_enrolled_credits == 1
    assert overall.total_credits == 5


def test_credit_table_rows_are_categorised(parse, options):
    summary = GradeInquiryExtractor(options).parse_document(parse(grade_page(SUBJECTS, CREDIT_TABLE))).credit_summary
    assert summary.overall.total_credits == 80
    assert summary.common_education.completed_credits == 20
    assert summary.specialized_education.currently_enrolled_credits == 16
    assert [c.category_name for c in summary.category_breakdown] == ["自由選択"]


def test_non_numeric_credits_and_unknown_grades(parse, options):
    html = grade_page(
        '<table class="listTable"><tbody>'
        "<tr><td>卒業研究</td><td>-</td><td>認定</td><td>教員</td><td></td></tr>"
        "</tbody></table>"
    )
    subject = GradeInquiryExtractor(options).parse_document(parse(html)).subjects[0]
    assert subject.credit_count is None
    assert subject.grade is Grade.NO_EVALUATION


def test_empty_page_yields_empty_record(parse, options):
    record = GradeInquiryExtractor(options).parse_document(parse("<html></html>"))
    assert record.subjects == []
    assert record.gpa_score == 0.0


def test_display_settings_are_passed_through(parse, options):
    settings = DisplaySettings(is_gpa_visible=True)
    extractor = GradeInquiryExtractor(options, display_settings=settings)
    assert extractor.parse_document(parse(grade_page(SUBJECTS))).display_settings.is_gpa_visible


def test_graduation_prediction(parse, options):
    html = """
    <div class="result-message">卒業見込みではありません</div>
    <table class="fusoku"><tbody>
      <tr><td>A01</td><td>3</td><td>専門科目が不足しています</td><td>4単位</td></tr>
      <tr><td>B02</td><td>-</td><td>英語が不足しています</td><td>2単位</td></tr>
    </tbody></table>
    """
    record = GraduationPredictionExtractor(options).parse_document(parse(html))
    assert record.judgement_message == "卒業見込みではありません"
    assert [item.requirement_code for item in record.shortfall_items] == ["A01", "B02"]
    assert record.shortfall_items[0].element_number == 3
    assert record.shortfall_items[1].element_number == 0
    assert record.shortfall_items[0].shortfall_amount == "4単位"


def test_graduation_prediction_without_message(parse, options):
    record = GraduationPredictionExtractor(options).parse_document(parse("<html></html>"))
    assert record.judgement_message == JUDGEMENT_UNAVAILABLE
    assert record.shortfall_items == []


def test_promotion_prediction(parse, options):
    html = """
    <p class="message">進級見込みです</p>
    <input type="hidden" name="lastSearchStudentId" value="S2025001">
    <input type="hidden" name="academicYear" value="2025">
    """
    record = PromotionPredictionExtractor(options).parse_document(parse(html))
    assert record.judgement_message == "進級見込みです"
    assert record.last_search_student_id == "S2025001"
    assert record.academic_year == "2025"
    assert record.semester == ""


def test_license_prediction_is_not_implemented(parse, options):
    with pytest.raises(NotImplementedExtraction, match="license prediction"):
        LicensePredictionExtractor(options).parse_document(parse("<html></html>"))
