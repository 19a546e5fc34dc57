"""Page type registry.

Maps every recognised UNIVERSAL PASSPORT page to its extractor:

    record = extract(PageType.GRADE_INQUIRY, html)
    extractor = get_extractor("課題提出一覧", ExtractorOptions().with_strict_mode(True))
"""

from enum import Enum

from bs4 import Tag
from pydantic import BaseModel

from src.unipa.config import ExtractorOptions
from src.unipa.contracts import PageExtractor
from src.unipa.logging import get_logger
from src.unipa.pages.assignments import AssignmentListExtractor
from src.unipa.pages.course_evaluation import CourseEvaluationExtractor
from src.unipa.pages.grades import (
    GradeInquiryExtractor,
    GraduationPredictionExtractor,
    LicensePredictionExtractor,
    PromotionPredictionExtractor,
)
from src.unipa.pages.portal import (
    NotificationDetailExtractor,
    PortalAllClassContactExtractor,
    PortalAllNotificationsExtractor,
    PortalClassContactExtractor,
    PortalExtractor,
)
from src.unipa.pages.questionnaire import QuestionnaireListExtractor
from src.unipa.pages.reservation import ClassroomReservationExtractor
from src.unipa.pages.student_info import StudentInfoExtractor
from src.unipa.pages.syllabus import (
    SyllabusSearchFormExtractor,
    SyllabusSearchResultExtractor,
    SyllabusViewExtractor,
)
from src.unipa.pages.test_status import TestAnswerStatusExtractor
from src.unipa.pages.timetable import (
    CourseTimetableCalendarExtractor,
    CourseTimetableListExtractor,
    StudentTimetableCalendarExtractor,
    StudentTimetableListExtractor,
    TeacherTimetableCalendarExtractor,
    TeacherTimetableListExtractor,
    TeacherTimetableSearchExtractor,
)
from src.unipa.utils import load_document

log = get_logger(__name__)


class PageType(str, Enum):
    """Recognised pages; values are the extractors' PAGE_TYPE strings."""

    GRADE_INQUIRY = "成績照会"
    GRADUATION_PREDICTION = "卒業見込判定"
    PROMOTION_PREDICTION = "進級見込判定"
    LICENSE_PREDICTION = "免許取得見込判定"
    ASSIGNMENT_LIST = "課題提出一覧"
    CLASSROOM_RESERVATION = "教室予約状況"
    PORTAL = "ポータル"
    PORTAL_ALL_NOTIFICATIONS = "ポータル（お知らせ全表示）"
    PORTAL_CLASS_CONTACT = "ポータル（授業連絡表示）"
    PORTAL_ALL_CLASS_CONTACT = "ポータル（授業連絡全表示）"
    NOTIFICATION_DETAIL = "お知らせ詳細"
    QUESTIONNAIRE_LIST = "アンケート一覧"
    STUDENT_INFO = "学籍情報照会"
    SYLLABUS_SEARCH = "syllabus_search"
    SYLLABUS_SEARCH_RESULT = "シラバス検索結果"
    SYLLABUS_VIEW = "syllabus_view"
    TEST_ANSWER_STATUS = "Stb00101A"
    COURSE_TIMETABLE_LIST = "学科開講一覧 表示形式：一覧"
    COURSE_TIMETABLE_CALENDAR = "学科開講一覧 表示形式：カレンダー"
    STUDENT_TIMETABLE_LIST = "学生時間割表 表示形式：一覧"
    STUDENT_TIMETABLE_CALENDAR = "学生時間割表 表示形式：カレンダー"
    TEACHER_TIMETABLE_SEARCH = "教員時間割検索"
    TEACHER_TIMETABLE_LIST = "教員時間割表 表示形式：一覧"
    TEACHER_TIMETABLE_CALENDAR = "教員時間割表 表示形式：カレンダー"
    COURSE_EVALUATION = "course_evaluation"

    @classmethod
    def parse(cls, key: "str | PageType") -> "PageType":
        """Accept a member, its name ("grade_inquiry") or its PAGE_TYPE value."""
        if isinstance(key, cls):
            return key
        try:
            return cls(key)
        except ValueError:
            pass
        try:
            return cls[key.upper().replace("-", "_")]
        except KeyError:
            raise ValueError(f"Unknown page type: {key!r}") from None


EXTRACTORS: dict[PageType, type[PageExtractor]] = {
    PageType.GRADE_INQUIRY: GradeInquiryExtractor,
    PageType.GRADUATION_PREDICTION: GraduationPredictionExtractor,
    PageType.PROMOTION_PREDICTION: PromotionPredictionExtractor,
    PageType.LICENSE_PREDICTION: LicensePredictionExtractor,
    PageType.ASSIGNMENT_LIST: AssignmentListExtractor,
    PageType.CLASSROOM_RESERVATION: ClassroomReservationExtractor,
    PageType.PORTAL: PortalExtractor,
    PageType.PORTAL_ALL_NOTIFICATIONS: PortalAllNotificationsExtractor,
    PageType.PORTAL_CLASS_CONTACT: PortalClassContactExtractor,
    PageType.PORTAL_ALL_CLASS_CONTACT: PortalAllClassContactExtractor,
    PageType.NOTIFICATION_DETAIL: NotificationDetailExtractor,
    PageType.QUESTIONNAIRE_LIST: QuestionnaireListExtractor,
    PageType.STUDENT_INFO: StudentInfoExtractor,
    PageType.SYLLABUS_SEARCH: SyllabusSearchFormExtractor,
    PageType.SYLLABUS_SEARCH_RESULT: SyllabusSearchResultExtractor,
    PageType.SYLLABUS_VIEW: SyllabusViewExtractor,
    PageType.TEST_ANSWER_STATUS: TestAnswerStatusExtractor,
    PageType.COURSE_TIMETABLE_LIST: CourseTimetableListExtractor,
    PageType.COURSE_TIMETABLE_CALENDAR: CourseTimetableCalendarExtractor,
    PageType.STUDENT_TIMETABLE_LIST: StudentTimetableListExtractor,
    PageType.STUDENT_TIMETABLE_CALENDAR: StudentTimetableCalendarExtractor,
    PageType.TEACHER_TIMETABLE_SEARCH: TeacherTimetableSearchExtractor,
    PageType.TEACHER_TIMETABLE_LIST: TeacherTimetableListExtractor,
    PageType.TEACHER_TIMETABLE_CALENDAR: TeacherTimetableCalendarExtractor,
    PageType.COURSE_EVALUATION: CourseEvaluationExtractor,
}


def get_extractor(page_type: str | PageType, options: ExtractorOptions | None = None) -> PageExtractor:
    """Extractor instance for a page type.

    Raises:
        ValueError: page_type is not a recognised page.
    """
    return EXTRACTORS[PageType.parse(page_type)](options)


def extract(
    page_type: str | PageType,
    html_or_document: str | bytes | Tag,
    options: ExtractorOptions | None = None,
) -> BaseModel:
    """Extract a page record from raw markup or an already-parsed document.

    Raw markup is parsed exactly once, with the configured tree builder.
    """
    extractor = get_extractor(page_type, options)
    if isinstance(html_or_document, Tag):
        document = html_or_document
    else:
        document = load_document(html_or_document)
    log.debug("extract_requested", page_type=extractor.PAGE_TYPE)
    return extractor.parse_document(document)
