import pytest

from src.unipa.errors import ElementNotFound, ExtractionError, SelectorCreationFailed
from src.unipa.locators import (
    StructuralPath,
    attr,
    by_id,
    compile_selector,
    containing_text,
    distinct,
    exists,
    find_by_id,
    hidden_input_value,
    input_value,
    require,
    require_id,
    select_all_first,
    select_first,
    select_path,
)

PAGE = """
<html><body>
  <span id="form1:htmlNendo">2025</span>
  <div class="gpa">GPA: 3.10</div>
  <ul><li class="item a">one</li><li class="item">two</li></ul>
  <input type="hidden" name="form1:htmlCurDate" value="2025/04/10">
  <input type="text" name="keyword" value="情報">
  <table><tr><td>t0r0</td></tr></table>
  <table><tr><td>t1r0</td></tr><tr><td>t1r1</td></tr></table>
</body></html>
"""


@pytest.fixture
def document(parse):
    return parse(PAGE)


def test_by_id_handles_jsf_colons(document):
    assert find_by_id(document, "form1:htmlNendo").get_text() == "2025"
    assert select_first(document, by_id("form1:htmlNendo")) is not None


def test_invalid_selector_raises_selector_creation_failed():
    with pytest.raises(SelectorCreationFailed) as exc_info:
        compile_selector("div[")
    assert exc_info.value.selector == "div["
    assert isinstance(exc_info.value, ExtractionError)


def test_candidates_fall_through_in_order(document):
    element = select_first(document, (".gpaScore", ".gpa", "#gpaValue"))
    assert element.get_text() == "GPA: 3.10"
    assert select_first(document, (".missing", ".also-missing")) is None
    assert [li.get_text() for li in select_all_first(document, (".none", "li.item"))] == ["one", "two"]
    assert exists(document, ("li",))


def test_require_raises_element_not_found(document):
    with pytest.raises(ElementNotFound) as exc_info:
        require(document, (".a-table", ".b-table"), "results table")
    assert exc_info.value.selector == ".a-table, .b-table"
    assert exc_info.value.context == "results table"


def test_require_id_reports_raw_id(document):
    assert require_id(document, "form1:htmlNendo", "year").get_text() == "2025"
    with pytest.raises(ElementNotFound) as exc_info:
        require_id(document, "form1:missing", "main table")
    assert exc_info.value.selector == "#form1:missing"


def test_attr_joins_multi_valued_attributes(document):
    assert attr(document.select_one("li"), "class") == "item a"
    assert attr(None, "class", "fallback") == "fallback"


def test_input_values(document):
    assert input_value(document, "keyword") == "情報"
    assert input_value(document, "absent") == ""
    assert hidden_input_value(document, "htmlCurDate") == "2025/04/10"


def test_select_path_tries_variants(document):
    row = select_path(document, (StructuralPath(5, 0), StructuralPath(1, 1)))
    assert row.get_text() == "t1r1"
    assert select_path(document, (StructuralPath(0, 3),)) is None


def test_containing_text(document):
    assert [li.get_text() for li in containing_text(document, "li", "tw")] == ["two"]


def test_distinct_compares_identity_not_markup(parse):
    document = parse("<table><tr><td>x</td></tr></table><table><tr><td>x</td></tr></table>")
    first, second = document.select("table")
    assert first == second
    assert distinct([first, second, first]) == [first, second]
    assert distinct([first, second, first])[1] is second
