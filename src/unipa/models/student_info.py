"""Records for the student register inquiry (学籍情報照会)."""

from pydantic import Field

from src.unipa.models.base import Record


class BasicInfo(Record):
    student_id: str = ""
    student_name: str = ""
    kana_name: str = ""
    gender: str = ""
    date_of_birth: str = ""  # YYYY-MM-DD
    nationality: str | None = None
    pc_email_address: str | None = None
    enrollment_type: str = ""
    student_status_type: str = ""
    enrollment_year: int = 0
    enrollment_term_no: int = 0
    curriculum_target_year: int = 0
    curriculum_target_term: int = 0
    enrollment_date: str = ""  # YYYY-MM-DD
    withdrawal_date: str | None = None
    expected_graduation_month_year: str = ""  # YYYY-MM
    completion_date: str | None = None


class AffiliationInfo(Record):
    affiliated_department_organization: str = ""
    curriculum_department_organization: str = ""
    grade_level: int = 0
    semester: int = 0
    major_course: str | None = None
    class_type_class: str = ""  # one line per class division, e.g. "2クラス割 A\n3クラス割 Ⅰ"


class AdvisorInfo(Record):
    advisor_name: str = ""
    advisor_start_date: str = ""
    advisor_end_date: str = ""


class StatusChangeInfo(Record):
    academic_status_history: list[str] = Field(default_factory=list)


class StudentInfo(Record):
    basic_info: BasicInfo = Field(default_factory=BasicInfo)
    affiliation_info: AffiliationInfo = Field(default_factory=AffiliationInfo)
    advisor_info: AdvisorInfo = Field(default_factory=AdvisorInfo)
    status_change_info: StatusChangeInfo = Field(default_factory=StatusChangeInfo)
