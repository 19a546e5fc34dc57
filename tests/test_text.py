import pytest

from src.unipa.text import (
    br_to_newlines,
    cell_lines,
    classify_by_keywords,
    is_placeholder,
    normalize_spaces,
    normalize_text,
    optional_text,
    parse_int,
    value_after_colon,
)


def test_br_variants_become_single_newlines():
    assert br_to_newlines("a<br>b<BR>c<br/>d<BR />e") == "a\nb\nc\nd\ne"


def test_normalize_text_strips_markup_and_placeholders():
    assert normalize_text("科目A<BR>教員B&nbsp;") == "科目A\n教員B"


def test_normalize_text_decodes_numeric_references():
    assert normalize_text("2025&#24180;度") == "2025年度"


def test_normalize_text_is_idempotent():
    once = normalize_text("<td>  授業&#24180; <br> 101 </td>")
    assert once == "授業年\n101"
    assert normalize_text(once) == once


def test_normalize_text_keeps_escaped_angle_brackets():
    assert normalize_text("1&lt;2 and 3&gt;1") == "1<2 and 3>1"
    assert normalize_text("数学&lt;応用&gt;&nbsp;") == "数学<応用>"


def test_normalize_text_walks_parsed_elements(parse):
    body = parse("<div>お知らせ&lt;重要&gt;<!-- memo --><br><b>本文</b>&nbsp;</div>").div
    assert normalize_text(body) == "お知らせ<重要>\n本文"


@pytest.mark.parametrize("value", [None, "", "&nbsp;", "\xa0", "　", "  \n "])
def test_placeholders(value):
    assert is_placeholder(value)
    assert optional_text(value) is None


def test_optional_text_keeps_real_values():
    assert not is_placeholder("値")
    assert optional_text("  値 ") == "値"


def test_normalize_spaces_collapses_full_width_spaces():
    assert normalize_spaces("2025年度　 前期\n一覧") == "2025年度 前期 一覧"


def test_cell_lines_splits_on_br(parse):
    cell = parse("<table><tr><td>Programming I<br>Prof. A<br/>Room 101</td></tr></table>").td
    assert cell_lines(cell) == ["Programming I", "Prof. A", "Room 101"]


def test_cell_lines_ignores_source_indentation(parse):
    cell = parse("<table><tr><td>\n    科目\n    <br>\n    教員\n</td></tr></table>").td
    assert cell_lines(cell) == ["科目", "教員"]


def test_cell_lines_keeps_escaped_markup_as_text(parse):
    cell = parse("<table><tr><td>数学&lt;応用&gt;<br><span>&lt;b&gt;教員</span></td></tr></table>").td
    assert cell_lines(cell) == ["数学<応用>", "<b>教員"]


def test_cell_lines_keeps_leading_empty_line():
    assert cell_lines("<br>Prof. A") == ["", "Prof. A"]


def test_parse_int():
    assert parse_int("1,024") == 1024
    assert parse_int(" 12 ") == 12
    assert parse_int("abc") is None
    assert parse_int("abc", 0) == 0
    assert parse_int(None, 5) == 5


def test_value_after_colon_uses_first_colon():
    assert value_after_colon("送信者：教務課") == "教務課"
    assert value_after_colon("時刻: 10:30") == "10:30"
    assert value_after_colon("ラベルなし") == "ラベルなし"


def test_classify_by_keywords_first_rule_wins():
    rules = ((("未提出",), "todo"), (("提出",), "done"))
    assert classify_by_keywords("【未提出】", rules, None) == "todo"
    assert classify_by_keywords("提出済み", rules, None) == "done"
    assert classify_by_keywords("不明", rules, "other") == "other"
