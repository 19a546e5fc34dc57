"""Records for the syllabus pages: search form, search result list and syllabus view."""

from pydantic import Field

from src.unipa.models.base import Record


class SyllabusSearchForm(Record):
    """Search conditions of the syllabus search form. Every field is optional."""

    managing_department: str | None = None  # 管理部署
    academic_year: int | None = None  # 年度
    semester_no: str | None = None  # 学期
    class_code: str | None = None  # 授業コード
    subject_name: str | None = None  # 科目名
    instructor_name: str | None = None  # 教員氏名
    department: str | None = None  # 学科
    grade_year: str | None = None  # 学年
    day_of_week: str | None = None  # 曜日
    period: str | None = None  # 時限
    intensive: bool | None = None  # 集中講義
    keyword: str | None = None
    classification: int | None = None  # 識別区分
    management_no: int | None = None  # 管理番号


class SearchConditions(Record):
    academic_year_semester: str = ""  # "2025年度 前期"
    subject_name: str | None = None
    department_course: str | None = None


class ResultMetadata(Record):
    total_count: int = 0
    current_page: int = 1
    total_pages: int = 1


class SyllabusLink(Record):
    link_id: str = ""
    onclick_action: str = ""
    is_active: bool = False


class CourseEntry(Record):
    schedule_day_period: str = ""
    course_code_and_name: str = ""
    instructor_names: str = ""
    course_type: str = ""
    target_grade: str | None = None  # None for blank / full-width-space cells
    semester: str = ""
    credits: str = ""
    syllabus_link: SyllabusLink = Field(default_factory=SyllabusLink)


class PagerButtons(Record):
    first_button_enabled: bool = False
    previous_button_enabled: bool = False
    next_button_enabled: bool = False
    last_button_enabled: bool = False
    page_display_text: str = ""  # "1/3 ページ"
    current_page_number: int = 1


class HiddenField(Record):
    field_name: str = ""
    field_value: str = ""


class FormInfo(Record):
    """Target of the result form, needed to post back for paging or detail links."""

    form_action: str = ""
    form_method: str = ""
    form_enctype: str = ""
    hidden_fields: list[HiddenField] = Field(default_factory=list)


class SyllabusSearchResult(Record):
    search_conditions: SearchConditions = Field(default_factory=SearchConditions)
    result_metadata: ResultMetadata = Field(default_factory=ResultMetadata)
    course_entries: list[CourseEntry] = Field(default_factory=list)
    pagination: PagerButtons = Field(default_factory=PagerButtons)
    form_info: FormInfo = Field(default_factory=FormInfo)


class ActiveLearning(Record):
    """Active learning methods marked with ◎ on the syllabus."""

    discussion: bool = False
    debate: bool = False
    group_work: bool = False
    presentation: bool = False
    practical_training: bool = False
    field_work: bool = False
    other_problem_solving_learning: bool = False


class LessonPlanItem(Record):
    session_number: str = ""  # "第1回"
    lesson_plan: str = ""
    outside_class_tasks: str = ""


class SyllabusView(Record):
    lesson_code: int = 0
    omnibus: str | None = None
    subject_name: str = ""
    assigned_grade: int = 0
    credits: int = 0
    academic_year_semester: str = ""
    day_period: str = ""
    target_department: str = ""
    course: str | None = None
    subject_category: str = ""
    required_elective_distinction: str = ""
    instructor: str = ""
    classroom: str | None = None
    industry_professional_led_class: str | None = None
    class_objectives_and_approach: str | None = None
    achievement_goals: list[str] = Field(default_factory=list)  # 達成目標１..７, in order
    active_learning: ActiveLearning = Field(default_factory=ActiveLearning)
    lesson_plan_details: list[LessonPlanItem] = Field(default_factory=list)
    feedback_on_assignments: str | None = None
    evaluation_methods_and_criteria: str | None = None
    textbook: str | None = None
    reference_books: str | None = None
    subject_positioning: str | None = None
    preparation_before_registration: str | None = None
