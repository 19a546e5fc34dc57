"""Records for the classroom reservation status page (教室予約状況)."""

from pydantic import Field

from src.unipa.models.base import Record, RecordEnum
from src.unipa.text import classify_by_keywords


class ReservationType(RecordEnum):
    AVAILABLE = "available"
    REGULAR_CLASS = "regular_class"
    INTENSIVE_COURSE = "intensive_course"
    OTHER = "other"
    DUPLICATE = "duplicate"
    UNAVAILABLE = "unavailable"

    @classmethod
    def classify(cls, text: str, style: str | None) -> "ReservationType":
        """Cell type from its text and class/style attribute.

        Empty cells are available. Style substrings win over text keywords;
        within each, the first listed match wins.
        """
        if not text.strip():
            return cls.AVAILABLE
        if style:
            by_style = classify_by_keywords(style, _STYLE_RULES, None)
            if by_style is not None:
                return by_style
        return classify_by_keywords(text, _TEXT_RULES, cls.REGULAR_CLASS)


_STYLE_RULES = (
    (("conflict", "duplicate"), ReservationType.DUPLICATE),
    (("unavailable", "disabled"), ReservationType.UNAVAILABLE),
    (("intensive",), ReservationType.INTENSIVE_COURSE),
)

_TEXT_RULES = (
    (("集中", "intensive"), ReservationType.INTENSIVE_COURSE),
    (("重複", "conflict"), ReservationType.DUPLICATE),
    (("利用不可", "unavailable"), ReservationType.UNAVAILABLE),
)


class SearchParams(Record):
    academic_year: str = ""
    semester: str = ""
    day_of_week: str = ""
    period: str = ""
    building: str = ""
    classroom: str = ""
    subject_name: str = ""
    instructor_name: str = ""


class ReservationCell(Record):
    """One day cell: up to three <br>-separated lines plus styling."""

    reservation_type: ReservationType = ReservationType.AVAILABLE
    subject_name: str | None = None  # line 1
    instructor_name: str | None = None  # line 2
    classroom_name: str | None = None  # line 3
    detail_link_url: str | None = None  # first <a href>
    cell_style: str | None = None  # class attribute, else style attribute


class ReservationRow(Record):
    """One period of the weekly grid, Monday to Sunday."""

    period: str = ""
    monday: ReservationCell = Field(default_factory=ReservationCell)
    tuesday: ReservationCell = Field(default_factory=ReservationCell)
    wednesday: ReservationCell = Field(default_factory=ReservationCell)
    thursday: ReservationCell = Field(default_factory=ReservationCell)
    friday: ReservationCell = Field(default_factory=ReservationCell)
    saturday: ReservationCell = Field(default_factory=ReservationCell)
    sunday: ReservationCell = Field(default_factory=ReservationCell)

    def cells(self) -> list[ReservationCell]:
        return [
            self.monday,
            self.tuesday,
            self.wednesday,
            self.thursday,
            self.friday,
            self.saturday,
            self.sunday,
        ]


class PopupReservationDetail(Record):
    reservation_id: str = ""
    subject_name: str = ""
    subject_code: str = ""
    instructor_name: str = ""
    classroom_name: str = ""
    start_datetime: str = ""  # ISO-8601 with +09:00 when recognised
    end_datetime: str = ""
    enrollment_count: int | None = None
    notes: str | None = None


class PopupClassDetail(Record):
    class_id: str = ""
    subject_name: str = ""
    subject_code: str = ""
    instructor_name: str = ""
    credit_count: int = 0
    enrollment_count: int = 0
    semester: str = ""
    schedule: str = ""
    classroom_name: str = ""
    course_description: str | None = None


class ConflictingClass(Record):
    class_id: str = ""
    subject_name: str = ""
    instructor_name: str = ""
    enrollment_count: int = 0
    priority: str | None = None


class PopupDuplicateClassDetail(Record):
    conflicting_classes: list[ConflictingClass] = Field(default_factory=list)
    conflict_description: str | None = None
    resolution_suggestion: str | None = None


class PopupClassroomDetail(Record):
    classroom_id: str = ""
    classroom_name: str = ""
    building_name: str = ""
    floor: str = ""
    capacity: int = 0
    equipment: list[str] = Field(default_factory=list)
    available_hours: str = ""
    notes: str | None = None


class ClassroomReservationStatus(Record):
    search_params: SearchParams = Field(default_factory=SearchParams)
    reservation_table_data: list[ReservationRow] = Field(default_factory=list)
    popup_reservation_detail: PopupReservationDetail | None = None
    popup_class_detail: PopupClassDetail | None = None
    popup_duplicate_class_detail: PopupDuplicateClassDetail | None = None
    popup_classroom_detail: PopupClassroomDetail | None = None
