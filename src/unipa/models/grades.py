"""Records for the grade pages: grade inquiry, graduation and promotion prediction."""

from pydantic import Field

from src.unipa.models.base import Record, RecordEnum


class ViewType(RecordEnum):
    STANDARD = "standard"
    BY_SEMESTER = "by_semester"


class DisplayPattern(Record):
    view_type: ViewType = ViewType.STANDARD


class DisplaySettings(Record):
    """Visibility toggles of the grade inquiry screen (caller-supplied)."""

    is_grade_label_visible: bool = False
    is_numeric_score_visible: bool = False
    is_attendance_visible: bool = False
    is_failed_subjects_visible: bool = False
    is_current_subjects_visible: bool = False
    is_gpa_visible: bool = False
    is_credit_status_visible: bool = False


class Grade(RecordEnum):
    """Letter grade. Matching is exact on the trimmed cell text."""

    NO_EVALUATION = "no_evaluation"
    AA = "AA"  # 秀
    A = "A"  # 優
    B = "B"  # 良
    C = "C"  # 可
    D = "D"  # 不可
    PASS = "pass"  # 合格

    @classmethod
    def from_label(cls, label: str) -> "Grade":
        return _GRADE_LABELS.get(label.strip(), cls.NO_EVALUATION)


_GRADE_LABELS: dict[str, Grade] = {
    "秀": Grade.AA,
    "優": Grade.A,
    "良": Grade.B,
    "可": Grade.C,
    "不可": Grade.D,
    "合格": Grade.PASS,
}

# Points used when GPA has to be computed from the subject list.
# 合格 counts as an average grade.
GRADE_POINTS: dict[str, float] = {
    "秀": 4.0,
    "優": 3.0,
    "良": 2.0,
    "可": 1.0,
    "不可": 0.0,
    "合格": 3.0,
}


class Semester(RecordEnum):
    SPRING = "spring"
    FALL = "fall"


class RequirementType(RecordEnum):
    ELECTIVE = "elective"
    REQUIRED = "required"


class SubjectCategory(Record):
    curriculum_name: str = ""
    major_category_name: str = ""
    middle_category_name: str = ""
    sub_category_name: str = ""
    requirement_type: RequirementType = RequirementType.ELECTIVE
    hierarchy_level: int = 0


class Subject(Record):
    """One row of the grade list (table.listTable)."""

    name: str = ""
    credit_count: int | None = None  # None when the credit cell is not numeric
    grade: Grade | None = None
    numeric_score: int | None = None  # not rendered on the list view
    academic_year: int = 2025  # list view carries no year column
    semester: Semester = Semester.SPRING
    instructor_name: str = ""
    is_currently_enrolled: bool = False
    category: SubjectCategory = Field(default_factory=SubjectCategory)


class CreditDetails(Record):
    required_for_graduation: int = 0
    completed_credits: int = 0
    currently_enrolled_credits: int = 0
    total_credits: int = 0  # completed + currently enrolled

    @classmethod
    def of(cls, required: int, completed: int, current: int) -> "CreditDetails":
        return cls(
            required_for_graduation=required,
            completed_credits=completed,
            currently_enrolled_credits=current,
            total_credits=completed + current,
        )


class CategoryCredits(Record):
    category_name: str = ""
    credit_details: CreditDetails = Field(default_factory=CreditDetails)


class CreditSummary(Record):
    overall: CreditDetails = Field(default_factory=CreditDetails)
    common_education: CreditDetails = Field(default_factory=CreditDetails)
    specialized_education: CreditDetails = Field(default_factory=CreditDetails)
    category_breakdown: list[CategoryCredits] = Field(default_factory=list)


class GradeInquiry(Record):
    display_pattern: DisplayPattern = Field(default_factory=DisplayPattern)
    display_settings: DisplaySettings = Field(default_factory=DisplaySettings)
    subjects: list[Subject] = Field(default_factory=list)
    gpa_score: float = 0.0
    credit_summary: CreditSummary = Field(default_factory=CreditSummary)


class ShortfallItem(Record):
    """One unmet graduation requirement (table.fusoku row)."""

    requirement_code: str = ""  # 条件コード
    element_number: int = 0  # 要素番号, 0 when not numeric
    shortfall_message: str = ""
    shortfall_amount: str = ""  # e.g. "4単位"


class GraduationPrediction(Record):
    judgement_message: str = ""
    shortfall_items: list[ShortfallItem] = Field(default_factory=list)


class PromotionPrediction(Record):
    judgement_message: str = ""
    last_search_student_id: str = ""  # hidden inputs, "" when not rendered
    academic_year: str = ""
    semester: str = ""
