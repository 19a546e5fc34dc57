"""PortalPage - portal top page (ポータル) and its notification display variants.

DOM structure (JSF ids, ":" escaped through by_id):
  input[type=image][alt]                       calendar buttons (前月/次月/本日/月間)
  .style24                                     "2025春学期"
  form1:Poa00101A:htmlCurDate / htmlHidden_selectDay     hidden dates
  #form1:Poa00101A:htmlCalendarTable tbody tr td         calendar grid
  #form1:Poa00401A:htmlTodayJikanTable tr                today's periods
    .date .jigen | .jugyo .kyoin .kyositu | img
  #form1:Poa00301A:htmlPrjTable tr a           favourite links
    input[name*=htmlLinkUrl|htmlLinkPrm|htmlLinkMtd][name*=<row>]
  #form1:Poa00201A:htmlParentTable
    #form1:Poa00201A:htmlParentTable:<n>:htmlDetailTbl   notification section n
      tr -> td x3+: icon | title | source | date

The four portal variants share calendar, schedule and favourites, and
differ only in which notification sections they read and their display
mode. Every component is optional: a missing table yields an empty
component.
"""

import re
from typing import ClassVar

from bs4 import Tag

from src.unipa.contracts import PageExtractor
from src.unipa.locators import (
    attr,
    containing_text,
    distinct,
    first_with_text,
    find_by_id,
    hidden_input_value,
    input_value,
    select_all,
    select_first,
    select_one,
)
from src.unipa.logging import get_logger
from src.unipa.models.portal import (
    AttachmentFile,
    Calendar,
    CalendarDay,
    DisplayMode,
    FavoriteLink,
    FavoriteLinks,
    NotificationDetail,
    NotificationEntry,
    Notifications,
    NotificationSection,
    Portal,
    Schedule,
    ScheduleEntry,
)
from src.unipa.tables import cell_texts, data_rows
from src.unipa.text import (
    element_text,
    normalize_text,
    optional_text,
    parse_int,
    value_after_colon,
)

log = get_logger(__name__)

CALENDAR_TABLE = "form1:Poa00101A:htmlCalendarTable"
CURRENT_DATE_INPUT = "form1:Poa00101A:htmlCurDate"
SELECTED_DAY_INPUT = "form1:Poa00101A:htmlHidden_selectDay"
SCHEDULE_TABLE = "form1:Poa00401A:htmlTodayJikanTable"
FAVORITES_TABLE = "form1:Poa00301A:htmlPrjTable"
NOTIFICATION_PARENT = "form1:Poa00201A:htmlParentTable"

NOTIFICATION_SECTIONS = (
    ("0", "お知らせ"),
    ("1", "遠隔授業"),
    ("2", "授業連絡"),
    ("3", "就職支援課"),
)
CLASS_CONTACT_SECTIONS = (("2", "授業連絡"),)

# Image button alt keywords -> Calendar field, first match wins
CALENDAR_BUTTONS = (
    (("前月",), "last_month_button"),
    (("次月",), "next_month_button"),
    (("今日", "本日"), "current_day_button"),
    (("月間",), "month_schedule_button"),
)

_YEAR_TERM = re.compile(r"(\d{4})(.+)")


def notification_section_id(index: str) -> str:
    return f"{NOTIFICATION_PARENT}:{index}:htmlDetailTbl"


def extract_calendar(document: Tag) -> Calendar:
    buttons: dict[str, str] = {}
    for button in select_all(document, 'input[type="image"][alt]'):
        alt = attr(button, "alt")
        for keywords, field in CALENDAR_BUTTONS:
            if any(keyword in alt for keyword in keywords):
                buttons[field] = alt
                break

    year = term = ""
    match = _YEAR_TERM.search(element_text(select_one(document, ".style24")))
    if match:
        year, term = match.group(1), match.group(2).strip()

    weeks: list[list[CalendarDay]] = []
    table = find_by_id(document, CALENDAR_TABLE)
    if table is not None:
        for row in select_all(table, "tbody tr"):
            week = [calendar_day(cell) for cell in select_all(row, "td")]
            if week:
                weeks.append(week)

    return Calendar(
        **buttons,
        year=year,
        month=term,
        current_date=input_value(document, CURRENT_DATE_INPUT),
        selected_day=input_value(document, SELECTED_DAY_INPUT),
        days=weeks,
    )


def calendar_day(cell: Tag) -> CalendarDay:
    classes = attr(cell, "class").split()
    return CalendarDay(
        day_number=parse_int(element_text(cell)),
        is_today="todayColor" in classes,
        link=attr(cell, "onclick") or None,
        css_classes=classes,
        cell_id=attr(cell, "id") or None,
    )


def extract_schedule(document: Tag) -> Schedule:
    entries: list[ScheduleEntry] = []
    table = find_by_id(document, SCHEDULE_TABLE)
    if table is not None:
        for row in select_all(table, "tr"):
            date = " ".join(
                text for text in (element_text(e) for e in select_all(row, ".date, .jigen")) if text
            )
            content = " ".join(
                text
                for text in (element_text(e) for e in select_all(row, ".jugyo, .kyoin, .kyositu"))
                if text
            )
            if not (date or content):
                continue
            image = select_one(row, "img[src]")
            entries.append(
                ScheduleEntry(date=date, class_content=content, image_path=attr(image, "src") or None)
            )

    return Schedule(entries=entries, selected_class_code=hidden_input_value(document, "htmlJugyoListState"))


def extract_favorite_links(document: Tag) -> FavoriteLinks:
    links: list[FavoriteLink] = []
    table = find_by_id(document, FAVORITES_TABLE)
    if table is None:
        return FavoriteLinks()

    for row_index, row in enumerate(select_all(table, "tr")):
        for anchor in select_all(row, "a"):
            name = element_text(anchor)
            if not name:
                continue
            url = _link_input(document, "htmlLinkUrl", row_index)
            params = _link_input(document, "htmlLinkPrm", row_index)
            method = _link_input(document, "htmlLinkMtd", row_index) or "POST"
            onclick = attr(anchor, "onclick")
            if not url and onclick:
                url, method = onclick, "POST"
            links.append(FavoriteLink(name=name, url=url, params=params, method=method))
    return FavoriteLinks(links=links)


def _link_input(document: Tag, kind: str, row_index: int) -> str:
    """Hidden input of a JSF data-table row, named "...:<row_index>:<kind>"."""
    element = select_one(document, f'input[name*="{kind}"][name*=":{row_index}:"]')
    return attr(element, "value")


def notification_entry(cells: list[Tag]) -> NotificationEntry:
    """Icon, title, source and date of one notification row."""
    read_image = important_image = None
    image = select_one(cells[0], "img[src]")
    if image is not None:
        src = attr(image, "src")
        if "read" in src or "未読" in src:
            read_image = src
        elif "important" in src or "重要" in src:
            important_image = src

    texts = cell_texts(cells)
    return NotificationEntry(
        read_status_image=read_image,
        important_status_image=important_image,
        title=optional_text(texts[1]),
        source=optional_text(texts[2]),
        insert_date=texts[3] if len(texts) > 3 else "",
    )


class PortalExtractor(PageExtractor[Portal]):
    """ポータル - calendar, today's schedule, favourite links and notification summaries."""

    PAGE_TYPE = "ポータル"

    SECTIONS: ClassVar[tuple[tuple[str, str], ...]] = NOTIFICATION_SECTIONS
    DISPLAY_MODE: ClassVar[DisplayMode] = DisplayMode.SUMMARY

    def extract(self, document: Tag) -> Portal:
        portal = Portal(
            calendar=extract_calendar(document),
            schedule=extract_schedule(document),
            favorite_links=extract_favorite_links(document),
            notifications=self.extract_notifications(document),
        )
        log.info(
            "portal_extracted",
            page_type=self.PAGE_TYPE,
            sections=len(portal.notifications.sections),
            links=len(portal.favorite_links.links),
        )
        return portal

    def extract_notifications(self, document: Tag) -> Notifications:
        if find_by_id(document, NOTIFICATION_PARENT) is None:
            self.debug("notification_table_missing")
            return Notifications()

        sections: list[NotificationSection] = []
        for index, title in self.SECTIONS:
            table = find_by_id(document, notification_section_id(index))
            if table is None:
                self.debug("notification_section_missing", section_id=index)
                continue
            sections.append(self.notification_section(table, index, title))
        return Notifications(sections=sections)

    def notification_section(self, table: Tag, index: str, title: str) -> NotificationSection:
        entries = [notification_entry(cells) for cells in data_rows(table, 3, row_selectors="tr")]
        comment = select_one(table, ".comment, .note")
        return NotificationSection(
            header_title=title,
            comment=optional_text(element_text(comment)),
            entries=entries,
            total_count=len(entries),
            section_id=index,
            display_mode=self.DISPLAY_MODE,
            has_all_button=self.DISPLAY_MODE is DisplayMode.SUMMARY,
        )


class PortalAllNotificationsExtractor(PortalExtractor):
    PAGE_TYPE = "ポータル（お知らせ全表示）"
    DISPLAY_MODE = DisplayMode.ALL


class PortalClassContactExtractor(PortalExtractor):
    PAGE_TYPE = "ポータル（授業連絡表示）"
    SECTIONS = CLASS_CONTACT_SECTIONS


class PortalAllClassContactExtractor(PortalExtractor):
    PAGE_TYPE = "ポータル（授業連絡全表示）"
    SECTIONS = CLASS_CONTACT_SECTIONS
    DISPLAY_MODE = DisplayMode.ALL


class NotificationDetailExtractor(PageExtractor[NotificationDetail]):
    """お知らせ詳細 - notification popup.

    Each field is looked up through an ordered candidate list; the first
    candidate with non-blank text wins. Absent fields are empty strings.
    """

    PAGE_TYPE = "お知らせ詳細"

    TITLE_CANDIDATES = (".popup-title", ".notification-title", "h1", "h2", ".title", "#title")
    SENDER_CANDIDATES = (".sender", ".from", ".author")
    SENDER_LABELS = ("送信者", "From")
    BODY_CANDIDATES = (".main-content", ".content", ".message", ".body", ".text-content", "p")
    ATTACHMENT_TABLES = (".attachment-table", ".file-table")
    DOWNLOAD_LINKS = 'a[href*="download"]'
    CLOSE_CANDIDATES = ('input[value*="閉じる"]', 'input[value*="Close"]', ".close-button")
    CLOSE_BUTTON_LABELS = ("閉じる", "Close")

    def extract(self, document: Tag) -> NotificationDetail:
        detail = NotificationDetail(
            title=element_text(first_with_text(document, self.TITLE_CANDIDATES)),
            sender=self.extract_sender(document),
            main_text=self.extract_main_text(document),
            attachments=self.extract_attachments(document),
            close_button=self.extract_close_button(document),
        )
        log.info("notification_detail_extracted", attachments=len(detail.attachments))
        return detail

    def extract_sender(self, document: Tag) -> str:
        element = first_with_text(document, self.SENDER_CANDIDATES)
        if element is not None:
            return self._strip_sender_label(element_text(element))

        for element in select_all(document, "span, td"):
            text = element_text(element)
            if text.startswith(self.SENDER_LABELS[0]) and len(text) > len(self.SENDER_LABELS[0]):
                return self._strip_sender_label(text)

        # Two-cell rows: "送信者" | value
        for row in select_all(document, "table tr"):
            cells = select_all(row, "td")
            if len(cells) >= 2:
                header = element_text(cells[0])
                if any(label in header for label in self.SENDER_LABELS):
                    return element_text(cells[1])
        return ""

    def _strip_sender_label(self, text: str) -> str:
        if text.startswith(self.SENDER_LABELS[0]):
            return value_after_colon(text)
        return text

    def extract_main_text(self, document: Tag) -> str:
        for selector in self.BODY_CANDIDATES:
            parts = [
                normalize_text(element)
                for element in select_all(document, selector)
                if element.get_text().strip()
            ]
            if parts:
                return "\n".join(parts)

        body = select_one(document, "body")
        if body is not None:
            self.debug("notification_body_fallback")
            return normalize_text(body)
        return ""

    def extract_attachments(self, document: Tag) -> list[AttachmentFile]:
        tables = [t for selector in self.ATTACHMENT_TABLES for t in select_all(document, selector)]
        tables = distinct(tables + containing_text(document, "table", "添付"))

        attachments: list[AttachmentFile] = []
        for table in tables:
            for row in select_all(table, "tr"):
                cells = select_all(row, "td")
                if len(cells) < 2:
                    continue
                name, size = cell_texts(cells[:2])
                if not name:
                    continue
                button = select_one(row, 'input[type="button"], button')
                attachments.append(
                    AttachmentFile(
                        file_name=name,
                        file_size=size,
                        download_button_id=attr(button, "id") or attr(button, "name"),
                    )
                )

        links = select_all(document, self.DOWNLOAD_LINKS) + containing_text(document, "a", "ダウンロード")
        for link in distinct(links):
            name = element_text(link)
            if name:
                attachments.append(AttachmentFile(file_name=name, download_button_id=attr(link, "href")))
        return attachments

    def extract_close_button(self, document: Tag) -> str:
        element = select_first(document, self.CLOSE_CANDIDATES)
        if element is not None:
            return attr(element, "value") or element_text(element)
        for button in select_all(document, "button"):
            text = element_text(button)
            if any(label in text for label in self.CLOSE_BUTTON_LABELS):
                return text
        return NotificationDetail().close_button
