import pytest

from src.unipa.models.reservation import ReservationType
from src.unipa.pages.reservation import ClassroomReservationExtractor

DAY_HEADERS = "".join(f"<th>{day}</th>" for day in "月火水木金土日")

PAGE = f"""
<html><body>
<form name="form1">
  <input type="text" name="form1:nendo" value="2025">
  <input type="hidden" name="form1:gakki" value="前期">
  <select name="form1:tou">
    <option value="A">A棟</option>
    <option value="B" selected>B棟</option>
  </select>
  <select name="form1:kyoshitsu"><option value="B101" selected>B101</option></select>
</form>
<table class="reservationTable">
  <tr><th>時限</th>{DAY_HEADERS}</tr>
  <tr>
    <td>1限</td>
    <td>プログラミング<br>山田<br>B101</td>
    <td>&nbsp;</td>
    <td class="intensive">集中講義A<br>佐藤</td>
    <td class="conflict" style="background:red">重複授業</td>
    <td><a href="/detail?id=1">英語<br>鈴木<br>B101</a></td>
    <td></td>
    <td></td>
  </tr>
  <tr><td>2限</td><td></td><td></td><td></td><td></td><td></td><td></td><td></td></tr>
</table>
</body></html>
"""

POPUPS = """
<div class="popup-reservation"><table>
  <tr><th>予約ID</th><td>R-001</td></tr>
  <tr><th>科目名</th><td>プログラミング</td></tr>
  <tr><th>開始日時</th><td>2025年1月15日 14:30</td></tr>
  <tr><th>終了日時</th><td>2025年1月15日 16:00</td></tr>
  <tr><th>受講者数</th><td>35</td></tr>
</table></div>
<div class="popup-class">
  <p>授業ID：C-10</p><p>科目名：情報処理</p><p>単位数：2</p><p>履修者数：40</p>
</div>
<div class="popup-duplicate">
  <table>
    <tr><th>授業ID</th><th>科目名</th><th>教員</th><th>人数</th><th>優先</th></tr>
    <tr><td>C1</td><td>英語A</td><td>鈴木</td><td>30</td><td>高</td></tr>
    <tr><td>C2</td><td>英語B</td><td>田中</td><td>25</td></tr>
  </table>
  <p>重複内容：同一時限に2授業</p>
</div>
<div class="popup-classroom">
  <p>教室名：B101</p><p>定員：120名</p><p>設備：プロジェクター、マイク/ホワイトボード</p>
</div>
"""


@pytest.fixture
def record(parse, options):
    return ClassroomReservationExtractor(options).parse_document(parse(PAGE))


@pytest.mark.parametrize(
    "text, style, expected",
    [
        ("", "conflict", ReservationType.AVAILABLE),
        ("ゼミ", None, ReservationType.REGULAR_CLASS),
        ("集中講義", None, ReservationType.INTENSIVE_COURSE),
        ("集中講義", "conflict", ReservationType.DUPLICATE),
        ("授業", "cell disabled", ReservationType.UNAVAILABLE),
        ("ゼミ", "cellStyle1", ReservationType.REGULAR_CLASS),
    ],
)
def test_classification_style_before_text(text, style, expected):
    assert ReservationType.classify(text, style) is expected


def test_search_params(record):
    params = record.search_params
    assert params.academic_year == "2025"
    assert params.semester == "前期"
    assert params.building == "B"
    assert params.classroom == "B101"
    assert params.subject_name == ""


def test_grid_rows_skip_header(record):
    assert [row.period for row in record.reservation_table_data] == ["1限", "2限"]


def test_grid_cells(record):
    row = record.reservation_table_data[0]

    assert row.monday.reservation_type is ReservationType.REGULAR_CLASS
    assert (row.monday.subject_name, row.monday.instructor_name, row.monday.classroom_name) == (
        "プログラミング",
        "山田",
        "B101",
    )
    assert row.monday.cell_style is None

    assert row.tuesday.reservation_type is ReservationType.AVAILABLE
    assert row.tuesday.subject_name is None

    assert row.wednesday.reservation_type is ReservationType.INTENSIVE_COURSE
    assert row.wednesday.classroom_name is None

    assert row.thursday.reservation_type is ReservationType.DUPLICATE
    assert row.thursday.cell_style == "conflict"

    assert row.friday.detail_link_url == "/detail?id=1"
    assert row.friday.instructor_name == "鈴木"


def test_grid_cell_keeps_escaped_text(parse, options):
    html = PAGE.replace("プログラミング<br>山田", "数学&lt;応用&gt;<br>教員")
    monday = ClassroomReservationExtractor(options).parse_document(parse(html)).reservation_table_data[0].monday
    assert monday.subject_name == "数学<応用>"
    assert monday.instructor_name == "教員"


def test_empty_row_is_all_available(record):
    row = record.reservation_table_data[1]
    assert all(cell.reservation_type is ReservationType.AVAILABLE for cell in row.cells())


def test_popups_absent_by_default(record):
    assert record.popup_reservation_detail is None
    assert record.popup_class_detail is None
    assert record.popup_duplicate_class_detail is None
    assert record.popup_classroom_detail is None


def test_popups(parse, options):
    html = PAGE.replace("</body>", POPUPS + "</body>")
    record = ClassroomReservationExtractor(options).parse_document(parse(html))

    reservation = record.popup_reservation_detail
    assert reservation.reservation_id == "R-001"
    assert reservation.subject_name == "プログラミング"
    assert reservation.start_datetime == "2025-01-15T14:30:00+09:00"
    assert reservation.end_datetime == "2025-01-15T16:00:00+09:00"
    assert reservation.enrollment_count == 35
    assert reservation.notes is None

    class_detail = record.popup_class_detail
    assert class_detail.class_id == "C-10"
    assert class_detail.credit_count == 2
    assert class_detail.enrollment_count == 40
    assert class_detail.subject_name == "情報処理"

    duplicate = record.popup_duplicate_class_detail
    assert [c.class_id for c in duplicate.conflicting_classes] == ["C1", "C2"]
    assert duplicate.conflicting_classes[0].priority == "高"
    assert duplicate.conflicting_classes[1].priority is None
    assert duplicate.conflict_description == "同一時限に2授業"

    classroom = record.popup_classroom_detail
    assert classroom.classroom_name == "B101"
    assert classroom.capacity == 120
    assert classroom.equipment == ["プロジェクター", "マイク", "ホワイトボード"]
