"""ClassroomReservationPage - classroom reservation status (教室予約状況, Ksc00101A).

DOM structure:
  form / .search-form / .condition-form
    input[name*=nendo|gakki|youbi|jigen|kamoku|kyoin]   current conditions
    select[name*=tou|kyoshitsu|...] option[selected]
  table.reservationTable / table.timeTable / first table
    tr -> td x8: period | Mon | Tue | Wed | Thu | Fri | Sat | Sun
      day cell: "subject<br>instructor<br>classroom", class/style carries type,
                optional <a href> to the reservation detail
  .popup-reservation   reservation detail   (optional)
  .popup-class         class detail         (optional)
  .popup-duplicate     conflicting classes  (optional)
  .popup-classroom     classroom detail     (optional)

Popups are label/value panels; each is extracted only when rendered.
"""

import re

from bs4 import Tag

from src.unipa.contracts import PageExtractor, SectionExtractor
from src.unipa.dates import format_iso_datetime
from src.unipa.locators import attr, distinct, select_all, select_first, select_one
from src.unipa.logging import get_logger
from src.unipa.models.reservation import (
    ClassroomReservationStatus,
    ConflictingClass,
    PopupClassDetail,
    PopupClassroomDetail,
    PopupDuplicateClassDetail,
    PopupReservationDetail,
    ReservationCell,
    ReservationRow,
    ReservationType,
    SearchParams,
)
from src.unipa.tables import (
    assign_labelled,
    cell_texts,
    data_rows,
    decode_line_broken_cell,
    labelled_values,
)
from src.unipa.text import cell_lines, element_text, optional_text, parse_int

log = get_logger(__name__)

DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

# Form field name fragments -> SearchParams field, first match wins
INPUT_FIELDS = (
    (("year", "nendo"), "academic_year"),
    (("semester", "gakki"), "semester"),
    (("dayofweek", "youbi"), "day_of_week"),
    (("period", "jigen"), "period"),
    (("subject", "kamoku"), "subject_name"),
    (("instructor", "kyoin"), "instructor_name"),
)
SELECT_FIELDS = (
    (("building", "tou"), "building"),
    (("classroom", "kyoshitsu"), "classroom"),
    (("year", "nendo"), "academic_year"),
    (("semester", "gakki"), "semester"),
    (("dayofweek", "youbi"), "day_of_week"),
    (("period", "jigen"), "period"),
)

_EQUIPMENT_SEPARATOR = re.compile(r"[、,，/／]")


def _field_for(name: str, rules) -> str | None:
    for fragments, field in rules:
        if any(fragment in name for fragment in fragments):
            return field
    return None


def decode_reservation_cell(cell: Tag) -> ReservationCell:
    """Decode one day cell of the reservation grid."""
    lines = cell_lines(cell)
    text = "\n".join(lines)
    style = optional_text(attr(cell, "class")) or optional_text(attr(cell, "style"))
    link = select_one(cell, "a[href]")

    reservation_type = ReservationType.classify(text, style)
    if reservation_type is ReservationType.AVAILABLE:
        subject = instructor = classroom = None
    else:
        subject, instructor, classroom = decode_line_broken_cell(cell)

    return ReservationCell(
        reservation_type=reservation_type,
        subject_name=subject,
        instructor_name=instructor,
        classroom_name=classroom,
        detail_link_url=attr(link, "href") or None,
        cell_style=style,
    )


class ReservationDetailPopup(SectionExtractor[PopupReservationDetail]):
    NAME = "popup-reservation"
    SELECTORS = (".popup-reservation", ".reservation-detail", "#reservationDetail")

    LABELS = (
        (("予約ID", "ID"), "reservation_id"),
        (("科目コード",), "subject_code"),
        (("科目名",), "subject_name"),
        (("担当教員",), "instructor_name"),
        (("教室",), "classroom_name"),
        (("開始",), "start_datetime"),
        (("終了",), "end_datetime"),
        (("受講者数", "履修者数", "人数"), "enrollment_count"),
        (("備考",), "notes"),
    )

    def extract(self, section: Tag) -> PopupReservationDetail:
        values = assign_labelled(labelled_values(section), self.LABELS)
        return PopupReservationDetail(
            reservation_id=values.get("reservation_id", ""),
            subject_name=values.get("subject_name", ""),
            subject_code=values.get("subject_code", ""),
            instructor_name=values.get("instructor_name", ""),
            classroom_name=values.get("classroom_name", ""),
            start_datetime=format_iso_datetime(values.get("start_datetime", "")),
            end_datetime=format_iso_datetime(values.get("end_datetime", "")),
            enrollment_count=parse_int(values.get("enrollment_count")),
            notes=optional_text(values.get("notes")),
        )


class ClassDetailPopup(SectionExtractor[PopupClassDetail]):
    NAME = "popup-class"
    SELECTORS = (".popup-class", ".class-detail", "#classDetail")

    LABELS = (
        (("授業ID", "ID"), "class_id"),
        (("科目コード", "授業コード"), "subject_code"),
        (("科目名",), "subject_name"),
        (("担当教員",), "instructor_name"),
        (("単位",), "credit_count"),
        (("履修者数", "受講者数"), "enrollment_count"),
        (("学期",), "semester"),
        (("曜日時限", "時間割"), "schedule"),
        (("教室",), "classroom_name"),
        (("概要", "授業内容"), "course_description"),
    )

    def extract(self, section: Tag) -> PopupClassDetail:
        values = assign_labelled(labelled_values(section), self.LABELS)
        return PopupClassDetail(
            class_id=values.get("class_id", ""),
            subject_name=values.get("subject_name", ""),
            subject_code=values.get("subject_code", ""),
            instructor_name=values.get("instructor_name", ""),
            credit_count=parse_int(values.get("credit_count"), 0),
            enrollment_count=parse_int(values.get("enrollment_count"), 0),
            semester=values.get("semester", ""),
            schedule=values.get("schedule", ""),
            classroom_name=values.get("classroom_name", ""),
            course_description=optional_text(values.get("course_description")),
        )


class DuplicateClassPopup(SectionExtractor[PopupDuplicateClassDetail]):
    """Conflicting classes table plus free-text description and suggestion."""

    NAME = "popup-duplicate"
    SELECTORS = (".popup-duplicate", ".duplicate-detail", "#duplicateDetail")

    LABELS = (
        (("重複内容", "説明"), "conflict_description"),
        (("対処", "解決"), "resolution_suggestion"),
    )

    def extract(self, section: Tag) -> PopupDuplicateClassDetail:
        classes: list[ConflictingClass] = []
        table = select_first(section, "table")
        if table is not None:
            for cells in data_rows(table, 4, row_selectors=("tbody tr", "tr")):
                texts = cell_texts(cells)
                classes.append(
                    ConflictingClass(
                        class_id=texts[0],
                        subject_name=texts[1],
                        instructor_name=texts[2],
                        enrollment_count=parse_int(texts[3], 0),
                        priority=optional_text(texts[4]) if len(texts) > 4 else None,
                    )
                )

        values = assign_labelled(labelled_values(section), self.LABELS)
        return PopupDuplicateClassDetail(
            conflicting_classes=classes,
            conflict_description=optional_text(values.get("conflict_description")),
            resolution_suggestion=optional_text(values.get("resolution_suggestion")),
        )


class ClassroomDetailPopup(SectionExtractor[PopupClassroomDetail]):
    NAME = "popup-classroom"
    SELECTORS = (".popup-classroom", ".classroom-detail", "#classroomDetail")

    LABELS = (
        (("教室ID", "ID"), "classroom_id"),
        (("教室名",), "classroom_name"),
        (("建物", "棟"), "building_name"),
        (("階",), "floor"),
        (("定員", "収容"), "capacity"),
        (("設備",), "equipment"),
        (("利用可能時間", "利用時間"), "available_hours"),
        (("備考",), "notes"),
    )

    def extract(self, section: Tag) -> PopupClassroomDetail:
        values = assign_labelled(labelled_values(section), self.LABELS)
        equipment = [
            item.strip()
            for item in _EQUIPMENT_SEPARATOR.split(values.get("equipment", ""))
            if item.strip()
        ]
        return PopupClassroomDetail(
            classroom_id=values.get("classroom_id", ""),
            classroom_name=values.get("classroom_name", ""),
            building_name=values.get("building_name", ""),
            floor=values.get("floor", ""),
            capacity=parse_int(re.sub(r"\D", "", values.get("capacity", "")), 0),
            equipment=equipment,
            available_hours=values.get("available_hours", ""),
            notes=optional_text(values.get("notes")),
        )


class ClassroomReservationExtractor(PageExtractor[ClassroomReservationStatus]):
    """教室予約状況 - search conditions, weekly grid and detail popups."""

    PAGE_TYPE = "教室予約状況"

    FORM_CANDIDATES = ("form", ".search-form", ".condition-form")
    TABLE_CANDIDATES = ("table.reservationTable", "table.timeTable", "table")

    reservation_popup = ReservationDetailPopup()
    class_popup = ClassDetailPopup()
    duplicate_popup = DuplicateClassPopup()
    classroom_popup = ClassroomDetailPopup()

    def extract(self, document: Tag) -> ClassroomReservationStatus:
        rows = self.extract_grid(document)
        record = ClassroomReservationStatus(
            search_params=self.extract_search_params(document),
            reservation_table_data=rows,
            popup_reservation_detail=self.reservation_popup.extract_optional(document),
            popup_class_detail=self.class_popup.extract_optional(document),
            popup_duplicate_class_detail=self.duplicate_popup.extract_optional(document),
            popup_classroom_detail=self.classroom_popup.extract_optional(document),
        )
        log.info("reservation_status_extracted", periods=len(rows))
        return record

    def extract_search_params(self, document: Tag) -> SearchParams:
        """Current search conditions; later forms override earlier ones."""
        values: dict[str, str] = {}
        forms = distinct(form for selector in self.FORM_CANDIDATES for form in select_all(document, selector))
        for form in forms:
            for element in select_all(form, "input[name]"):
                field = _field_for(attr(element, "name"), INPUT_FIELDS)
                if field:
                    values[field] = attr(element, "value")
            for element in select_all(form, "select[name]"):
                field = _field_for(attr(element, "name"), SELECT_FIELDS)
                if field:
                    values[field] = attr(select_one(element, "option[selected]"), "value")
        return SearchParams(**values)

    def extract_grid(self, document: Tag) -> list[ReservationRow]:
        table = select_first(document, self.TABLE_CANDIDATES)
        if table is None:
            self.debug("reservation_table_missing")
            return []

        rows: list[ReservationRow] = []
        for cells in data_rows(table, 8, row_selectors="tr"):
            day_cells = {day: decode_reservation_cell(cell) for day, cell in zip(DAYS, cells[1:8])}
            rows.append(ReservationRow(period=element_text(cells[0]), **day_cells))
        return rows
