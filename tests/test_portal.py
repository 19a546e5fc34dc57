import pytest

from src.unipa.models.portal import DisplayMode
from src.unipa.pages.portal import (
    NotificationDetailExtractor,
    PortalAllClassContactExtractor,
    PortalAllNotificationsExtractor,
    PortalClassContactExtractor,
    PortalExtractor,
)

PORTAL = """
<html><body><form id="form1">
  <input type="image" alt="前月" src="prev.gif">
  <input type="image" alt="次月" src="next.gif">
  <input type="image" alt="本日" src="today.gif">
  <input type="image" alt="月間スケジュール" src="month.gif">
  <span class="style24">2025春学期</span>
  <input type="hidden" name="form1:Poa00101A:htmlCurDate" value="2025/04/10">
  <input type="hidden" name="form1:Poa00101A:htmlHidden_selectDay" value="10">
  <table id="form1:Poa00101A:htmlCalendarTable"><tbody>
    <tr><td>&nbsp;</td><td class="day todayColor" id="day10" onclick="selectDay(10)">10</td></tr>
    <tr><td class="day">11</td></tr>
  </tbody></table>

  <input type="hidden" name="form1:Poa00401A:htmlJugyoListState" value="K101">
  <table id="form1:Poa00401A:htmlTodayJikanTable">
    <tr>
      <td class="jigen">1限</td>
      <td><span class="jugyo">プログラミング</span><span class="kyoin">山田</span><img src="/img/class.gif"></td>
    </tr>
  </table>

  <table id="form1:Poa00301A:htmlPrjTable">
    <tr><td><a href="#">図書館</a></td></tr>
    <tr><td><a href="#" onclick="openLink('mail')">メール</a></td></tr>
  </table>
  <input type="hidden" name="form1:Poa00301A:htmlPrjTable:0:htmlLinkUrl" value="https://lib.example.ac.jp">
  <input type="hidden" name="form1:Poa00301A:htmlPrjTable:0:htmlLinkMtd" value="GET">

  <table id="form1:Poa00201A:htmlParentTable"><tr><td>
    <table id="form1:Poa00201A:htmlParentTable:0:htmlDetailTbl">
      <tr><td><img src="/img/unread.gif"></td><td>休講のお知らせ</td><td>教務課</td><td>2025/04/09</td></tr>
    </table>
    <table id="form1:Poa00201A:htmlParentTable:2:htmlDetailTbl">
      <tr><td><img src="/img/important.gif"></td><td>課題について</td><td>山田</td><td>2025/04/08</td></tr>
      <tr><td></td><td>教室変更</td><td>佐藤</td><td>2025/04/07</td></tr>
    </table>
  </td></tr></table>
</form></body></html>
"""


@pytest.fixture
def portal(parse, options):
    return PortalExtractor(options).parse_document(parse(PORTAL))


def test_calendar(portal):
    calendar = portal.calendar
    assert calendar.last_month_button == "前月"
    assert calendar.next_month_button == "次月"
    assert calendar.current_day_button == "本日"
    assert calendar.month_schedule_button == "月間スケジュール"
    assert (calendar.year, calendar.month) == ("2025", "春学期")
    assert calendar.current_date == "2025/04/10"
    assert calendar.selected_day == "10"

    first_week = calendar.days[0]
    assert first_week[0].day_number is None
    assert first_week[1].day_number == 10
    assert first_week[1].is_today
    assert first_week[1].link == "selectDay(10)"
    assert first_week[1].cell_id == "day10"
    assert first_week[1].css_classes == ["day", "todayColor"]
    assert not calendar.days[1][0].is_today


def test_schedule(portal):
    entries = portal.schedule.entries
    assert len(entries) == 1
    assert entries[0].date == "1限"
    assert entries[0].class_content == "プログラミング 山田"
    assert entries[0].image_path == "/img/class.gif"
    assert portal.schedule.selected_class_code == "K101"


def test_favorite_links(portal):
    links = portal.favorite_links.links
    assert [link.name for link in links] == ["図書館", "メール"]
    assert links[0].url == "https://lib.example.ac.jp"
    assert links[0].method == "GET"
    assert links[1].url == "openLink('mail')"
    assert links[1].method == "POST"


def test_summary_notifications(portal):
    sections = portal.notifications.sections
    assert [s.header_title for s in sections] == ["お知らせ", "授業連絡"]
    assert all(s.display_mode is DisplayMode.SUMMARY and s.has_all_button for s in sections)

    news = sections[0].entries[0]
    assert news.title == "休講のお知らせ"
    assert news.source == "教務課"
    assert news.insert_date == "2025/04/09"
    assert news.read_status_image == "/img/unread.gif"

    contact = sections[1]
    assert contact.section_id == "2"
    assert contact.total_count == 2
    assert contact.entries[0].important_status_image == "/img/important.gif"
    assert contact.entries[1].read_status_image is None


def test_all_notifications_variant(parse, options):
    portal = PortalAllNotificationsExtractor(options).parse_document(parse(PORTAL))
    assert len(portal.notifications.sections) == 2
    assert all(s.display_mode is DisplayMode.ALL and not s.has_all_button for s in portal.notifications.sections)


@pytest.mark.parametrize(
    "extractor_class, mode",
    [
        (PortalClassContactExtractor, DisplayMode.SUMMARY),
        (PortalAllClassContactExtractor, DisplayMode.ALL),
    ],
)
def test_class_contact_variants_read_only_class_contact(parse, options, extractor_class, mode):
    portal = extractor_class(options).parse_document(parse(PORTAL))
    sections = portal.notifications.sections
    assert [s.header_title for s in sections] == ["授業連絡"]
    assert sections[0].display_mode is mode
    # Shared components are still extracted
    assert portal.calendar.year == "2025"


def test_bare_page_yields_empty_components(parse, options):
    portal = PortalExtractor(options).parse_document(parse("<html><body></body></html>"))
    assert portal.calendar.days == []
    assert portal.schedule.entries == []
    assert portal.favorite_links.links == []
    assert portal.notifications.sections == []


def test_notification_detail(parse, options):
    html = """
    <div class="popup">
      <h2 class="popup-title">休講のお知らせ</h2>
      <span>送信者：教務課</span>
      <div class="main-content">明日の1限は休講です。<br>補講は後日連絡します。</div>
      <table class="attachment-table">
        <tr><td>資料.pdf</td><td>120KB</td><td><input type="button" id="dl1" value="ダウンロード"></td></tr>
      </table>
      <input type="button" value="閉じる">
    </div>
    """
    detail = NotificationDetailExtractor(options).parse_document(parse(html))
    assert detail.title == "休講のお知らせ"
    assert detail.sender == "教務課"
    assert detail.main_text == "明日の1限は休講です。\n補講は後日連絡します。"
    assert len(detail.attachments) == 1
    assert detail.attachments[0].file_name == "資料.pdf"
    assert detail.attachments[0].file_size == "120KB"
    assert detail.attachments[0].download_button_id == "dl1"
    assert detail.close_button == "閉じる"


def test_notification_body_keeps_escaped_text(parse, options):
    html = '<div class="main-content">条件：1&lt;2 and 3&gt;1<br>以上</div>'
    detail = NotificationDetailExtractor(options).parse_document(parse(html))
    assert detail.main_text == "条件：1<2 and 3>1\n以上"


def test_identical_attachment_tables_are_all_read(parse, options):
    table = '<table class="attachment-table"><tr><td>資料.pdf</td><td>120KB</td></tr></table>'
    link = '<a href="/files/download?id=7">案内.pdf</a>'
    detail = NotificationDetailExtractor(options).parse_document(parse(table * 2 + link * 2))
    assert [a.file_name for a in detail.attachments] == ["資料.pdf", "資料.pdf", "案内.pdf", "案内.pdf"]


def test_notification_detail_fallbacks(parse, options):
    html = """
    <html><body>
      <table><tr><td>送信者</td><td>学生課</td></tr></table>
      <p>本文です</p>
      <a href="/files/download?id=7">案内.pdf</a>
    </body></html>
    """
    detail = NotificationDetailExtractor(options).parse_document(parse(html))
    assert detail.title == ""
    assert detail.sender == "学生課"
    assert detail.main_text == "本文です"
    assert [(a.file_name, a.download_button_id) for a in detail.attachments] == [
        ("案内.pdf", "/files/download?id=7")
    ]
    assert detail.close_button == "閉じる"
