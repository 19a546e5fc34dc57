import pytest

from src.unipa.errors import ElementNotFound
from src.unipa.pages.student_info import StudentInfoExtractor

PAGE = """
<html><body>
<table id="baseTable">
  <tr><th>学籍番号</th><td>S2025001</td></tr>
  <tr><th>学生氏名</th><td>山田 太郎</td></tr>
  <tr><th>生年月日</th><td>2005年4月1日</td></tr>
  <tr><th>国籍</th><td>&nbsp;</td></tr>
  <tr><th>入学年度</th><td>2023</td></tr>
  <tr><th>出学日付</th><td></td></tr>
  <tr><th>卒業予定年月</th><td>2027年3月</td></tr>
  <tr><th>未知の項目</th><td>無視される</td></tr>
</table>

<div class="subTitleArea">所属情報</div>
<table>
  <tr><th>所属学科組織</th><td>情報工学科</td></tr>
  <tr><th>学年</th><td>3</td></tr>
  <tr><th>クラス種別＋クラス</th><td>2クラス割 A<br>3クラス割 Ⅰ</td></tr>
</table>

<div class="subTitleArea">担当教員</div>
<table>
  <tr><th>担当教員名</th><td>鈴木 一郎</td></tr>
  <tr><th>担当開始日</th><td>2023年4月1日</td></tr>
</table>

<div class="subTitleArea">異動情報</div>
<table>
  <tr><th>学籍状況</th><td>2023年4月1日 入学<br>2024年4月1日 進級</td></tr>
</table>
</body></html>
"""


@pytest.fixture
def info(parse, options):
    return StudentInfoExtractor(options).parse_document(parse(PAGE))


def test_basic_info(info):
    basic = info.basic_info
    assert basic.student_id == "S2025001"
    assert basic.student_name == "山田 太郎"
    assert basic.date_of_birth == "2005-04-01"
    assert basic.nationality is None
    assert basic.enrollment_year == 2023
    assert basic.withdrawal_date is None
    assert basic.expected_graduation_month_year == "2027-03"
    assert basic.kana_name == ""


def test_affiliation_info(info):
    affiliation = info.affiliation_info
    assert affiliation.affiliated_department_organization == "情報工学科"
    assert affiliation.grade_level == 3
    assert affiliation.class_type_class == "2クラス割 A\n3クラス割 Ⅰ"
    assert affiliation.major_course is None


def test_advisor_info(info):
    assert info.advisor_info.advisor_name == "鈴木 一郎"
    assert info.advisor_info.advisor_start_date == "2023-04-01"
    assert info.advisor_info.advisor_end_date == ""


def test_status_history(info):
    assert info.status_change_info.academic_status_history == [
        "2023年4月1日 入学",
        "2024年4月1日 進級",
    ]


def test_missing_sections_are_empty(parse, options):
    html = '<table id="baseTable"><tr><th>学籍番号</th><td>S1</td></tr></table>'
    info = StudentInfoExtractor(options).parse_document(parse(html))
    assert info.basic_info.student_id == "S1"
    assert info.affiliation_info.grade_level == 0
    assert info.status_change_info.academic_status_history == []


def test_missing_base_table(parse, options):
    with pytest.raises(ElementNotFound) as exc_info:
        StudentInfoExtractor(options).parse_document(parse("<html><body><table></table></body></html>"))
    assert exc_info.value.selector == "#baseTable"
