import pytest

from src.unipa.builders import GradeInquiryBuilder, PaginationBuilder, SyllabusSearchFormBuilder
from src.unipa.errors import MissingRequiredField, RecordValidationError
from src.unipa.models.grades import CreditDetails, CreditSummary


def test_pagination_builder_derives_neighbours():
    info = PaginationBuilder().pages(2, 5).build()
    assert (info.current_page, info.total_pages) == (2, 5)
    assert info.has_previous and info.has_next


def test_builder_set_returns_new_builder():
    base = PaginationBuilder().set(current_page=1)
    branched = base.set(total_pages=3)
    assert "total_pages" not in base.fields
    assert branched.fields["total_pages"] == 3


def test_missing_required_field():
    with pytest.raises(MissingRequiredField) as exc_info:
        PaginationBuilder().set(current_page=1).build()
    assert exc_info.value.field == "total_pages"


def test_inconsistent_pagination_is_rejected():
    builder = PaginationBuilder().set(current_page=3, total_pages=2, has_previous=True, has_next=False)
    with pytest.raises(RecordValidationError, match="current_page 3 > total_pages 2"):
        builder.build()


def test_field_type_errors_become_record_validation_errors():
    with pytest.raises(RecordValidationError) as exc_info:
        PaginationBuilder().set(current_page="abc", total_pages=1).build()
    assert exc_info.value.field == "current_page"


def test_grade_inquiry_accepts_other_gpa_scales():
    record = GradeInquiryBuilder().set(subjects=[], gpa_score=4.3, credit_summary=CreditSummary()).build()
    assert record.gpa_score == 4.3


def test_grade_inquiry_credit_totals_must_add_up():
    broken = CreditDetails(completed_credits=4, currently_enrolled_credits=2, total_credits=10)
    builder = GradeInquiryBuilder().set(
        subjects=[], gpa_score=2.0, credit_summary=CreditSummary(overall=broken)
    )
    with pytest.raises(RecordValidationError, match="overall total_credits 10"):
        builder.build()


def test_syllabus_search_form_builder():
    form = SyllabusSearchFormBuilder().academic_year(2025).subject_name("情報").intensive(True).build()
    assert form.academic_year == 2025
    assert form.subject_name == "情報"
    assert form.intensive is True
    assert form.instructor_name is None


def test_syllabus_search_form_rejects_non_positive_year():
    with pytest.raises(RecordValidationError):
        SyllabusSearchFormBuilder().academic_year(0).build()
