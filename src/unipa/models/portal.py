"""Records for the portal top page (ポータル) and the notification detail popup."""

from pydantic import Field

from src.unipa.models.base import Record, RecordEnum


class DisplayMode(RecordEnum):
    SUMMARY = "summary"
    ALL = "all"


class CalendarDay(Record):
    day_number: int | None = None  # None for &nbsp; padding cells
    is_today: bool = False  # "todayColor" class present
    link: str | None = None  # onclick handler
    css_classes: list[str] = Field(default_factory=list)
    cell_id: str | None = None


class Calendar(Record):
    last_month_button: str = ""
    next_month_button: str = ""
    current_day_button: str = ""
    month_schedule_button: str = ""
    year: str = ""
    month: str = ""  # remainder after the year, e.g. "春学期"
    current_date: str = ""  # hidden input
    selected_day: str = ""  # hidden input
    days: list[list[CalendarDay]] = Field(default_factory=list)  # weeks of days


class ScheduleEntry(Record):
    date: str = ""
    class_content: str = ""
    image_path: str | None = None


class Schedule(Record):
    title: str = "今日の時限割"
    entries: list[ScheduleEntry] = Field(default_factory=list)
    selected_class_code: str = ""  # hidden input


class FavoriteLink(Record):
    name: str = ""
    url: str = ""
    params: str = ""
    method: str = "POST"


class FavoriteLinks(Record):
    title: str = "お気に入りリンク"
    edit_button: str = "編集"
    links: list[FavoriteLink] = Field(default_factory=list)


class NotificationEntry(Record):
    read_status_image: str | None = None
    important_status_image: str | None = None
    title: str | None = None
    source: str | None = None
    insert_date: str = ""


class NotificationSection(Record):
    header_title: str = ""
    comment: str | None = None
    entries: list[NotificationEntry] = Field(default_factory=list)
    total_count: int = 0
    section_id: str = ""
    display_mode: DisplayMode = DisplayMode.SUMMARY
    has_all_button: bool = True


class Notifications(Record):
    sections: list[NotificationSection] = Field(default_factory=list)
    all_info_button: str = "全て表示"


class Portal(Record):
    calendar: Calendar = Field(default_factory=Calendar)
    schedule: Schedule = Field(default_factory=Schedule)
    favorite_links: FavoriteLinks = Field(default_factory=FavoriteLinks)
    notifications: Notifications = Field(default_factory=Notifications)


class AttachmentFile(Record):
    file_name: str = ""
    file_size: str = ""
    download_button_id: str = ""  # button id/name, or the href of a download link


class NotificationDetail(Record):
    title: str = ""
    sender: str = ""
    main_text: str = ""
    attachments: list[AttachmentFile] = Field(default_factory=list)
    close_button: str = "閉じる"
