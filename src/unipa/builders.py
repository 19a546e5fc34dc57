"""Record builders with cross-field invariants.

Builders are immutable: every setter returns a new builder, so a partially
filled builder can be shared and branched.

    form = SyllabusSearchFormBuilder().academic_year(2025).subject_name("情報").build()
"""

from src.unipa.contracts import RecordBuilder
from src.unipa.models.assignments import PaginationInfo
from src.unipa.models.grades import CreditDetails, GradeInquiry
from src.unipa.models.syllabus import SyllabusSearchForm

def _credit_problems(label: str, details: CreditDetails) -> list[str]:
    expected = details.completed_credits + details.currently_enrolled_credits
    if details.total_credits != expected:
        return [f"{label} total_credits {details.total_credits} != completed + enrolled {expected}"]
    return []


class GradeInquiryBuilder(RecordBuilder[GradeInquiry]):
    RECORD = GradeInquiry
    REQUIRED = ("subjects", "gpa_score", "credit_summary")

    def check(self, record: GradeInquiry) -> list[str]:
        problems: list[str] = []
        summary = record.credit_summary
        problems += _credit_problems("overall", summary.overall)
        problems += _credit_problems("common_education", summary.common_education)
        problems += _credit_problems("specialized_education", summary.specialized_education)
        for category in summary.category_breakdown:
            problems += _credit_problems(category.category_name, category.credit_details)
        return problems


class PaginationBuilder(RecordBuilder[PaginationInfo]):
    """Pagination state; has_previous / has_next are derived unless set explicitly."""

    RECORD = PaginationInfo
    REQUIRED = ("current_page", "total_pages")

    def pages(self, current_page: int, total_pages: int) -> "PaginationBuilder":
        return self.set(
            current_page=current_page,
            total_pages=total_pages,
            has_previous=current_page > 1,
            has_next=current_page < total_pages,
        )

    def check(self, record: PaginationInfo) -> list[str]:
        problems: list[str] = []
        if record.current_page < 1:
            problems.append(f"current_page {record.current_page} < 1")
        if record.total_pages and record.current_page > record.total_pages:
            problems.append(f"current_page {record.current_page} > total_pages {record.total_pages}")
        if record.has_previous != (record.current_page > 1):
            problems.append("has_previous inconsistent with current_page")
        if record.has_next != (record.current_page < record.total_pages):
            problems.append("has_next inconsistent with total_pages")
        return problems


class SyllabusSearchFormBuilder(RecordBuilder[SyllabusSearchForm]):
    """Fluent construction of syllabus search conditions."""

    RECORD = SyllabusSearchForm

    def managing_department(self, value: str) -> "SyllabusSearchFormBuilder":
        return self.set(managing_department=value)

    def academic_year(self, value: int) -> "SyllabusSearchFormBuilder":
        return self.set(academic_year=value)

    def semester_no(self, value: str) -> "SyllabusSearchFormBuilder":
        return self.set(semester_no=value)

    def class_code(self, value: str) -> "SyllabusSearchFormBuilder":
        return self.set(class_code=value)

    def subject_name(self, value: str) -> "SyllabusSearchFormBuilder":
        return self.set(subject_name=value)

    def instructor_name(self, value: str) -> "SyllabusSearchFormBuilder":
        return self.set(instructor_name=value)

    def department(self, value: str) -> "SyllabusSearchFormBuilder":
        return self.set(department=value)

    def grade_year(self, value: str) -> "SyllabusSearchFormBuilder":
        return self.set(grade_year=value)

    def day_of_week(self, value: str) -> "SyllabusSearchFormBuilder":
        return self.set(day_of_week=value)

    def period(self, value: str) -> "SyllabusSearchFormBuilder":
        return self.set(period=value)

    def intensive(self, value: bool) -> "SyllabusSearchFormBuilder":
        return self.set(intensive=value)

    def keyword(self, value: str) -> "SyllabusSearchFormBuilder":
        return self.set(keyword=value)

    def classification(self, value: int) -> "SyllabusSearchFormBuilder":
        return self.set(classification=value)

    def management_no(self, value: int) -> "SyllabusSearchFormBuilder":
        return self.set(management_no=value)

    def check(self, record: SyllabusSearchForm) -> list[str]:
        if record.academic_year is not None and record.academic_year < 1:
            return [f"academic_year {record.academic_year} must be positive"]
        return []
