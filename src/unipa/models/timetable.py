"""Records for the timetable pages (学科開講一覧 and friends)."""

from pydantic import Field

from src.unipa.models.base import Record, RecordEnum


class DisplayFormat(RecordEnum):
    LIST = "list"
    CALENDAR = "calendar"


class ClassInfo(Record):
    """The fields every list-view timetable row carries."""

    day_and_period: str = ""  # "月 3", or "集中" for intensive courses
    class_code: str = ""
    subject_name: str = ""
    teacher_name: str = ""
    classroom: str | None = None


class CourseTimetableEntry(ClassInfo):
    credits: int = 0  # not rendered by the list view
    enrollment_count: int | None = None


class CourseTimetableList(Record):
    student_info_label: str | None = None
    opening_year: int | None = None
    semester: str | None = None
    display_format: DisplayFormat = DisplayFormat.LIST
    classes: list[CourseTimetableEntry] = Field(default_factory=list)
    irregular_classes: list[CourseTimetableEntry] = Field(default_factory=list)  # 集中講義・実習
