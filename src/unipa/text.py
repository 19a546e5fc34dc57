"""Text normalization for raw HTML fragments.

Portal markup mixes <br>/<BR>/<br/> line breaks, &nbsp; placeholders and
numeric character references (&#24180; for 年) inside table cells. These
helpers turn such fragments into clean strings:

    normalize_text("科目A<BR>教員B&nbsp;")   -> "科目A\\n教員B"
    optional_text("&nbsp;")                 -> None
    cell_lines("<td>科目<br>教員<br>101</td>") -> ["科目", "教員", "101"]

Raw fragments are reduced to text with a re-parse through BeautifulSoup's
built-in html.parser. Parsed elements are walked directly and split at
their <br> children, so text the page escaped (&lt;応用&gt;) survives as-is.
"""

import re

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

# Every <br> variant: <br>, <BR>, <br/>, <BR/>, <br />
BR_TAG = re.compile(r"<br\s*/?>", re.IGNORECASE)

# Literal placeholder tokens rendered into empty cells
NBSP_ENTITY = "&nbsp;"
NBSP = "\xa0"
FULL_WIDTH_SPACE = "　"

_HORIZONTAL_SPACE = re.compile(r"[ \t\r\f\v\xa0　]+")
_ANY_SPACE = re.compile(r"\s+")
_COLON = re.compile(r"[:：]")


def br_to_newlines(fragment: str) -> str:
    """Replace every <br> variant with exactly one newline."""
    return BR_TAG.sub("\n", fragment)


def strip_tags(fragment: str) -> str:
    """Drop markup from a fragment, keeping its text with entities decoded."""
    if "<" not in fragment and "&" not in fragment:
        return fragment
    return BeautifulSoup(fragment, "html.parser").get_text()


def _element_lines(element: Tag) -> list[str]:
    """Text of a parsed element, split at each <br> inside it."""
    lines = [""]
    for node in element.descendants:
        if isinstance(node, Tag):
            if node.name == "br":
                lines.append("")
        elif isinstance(node, NavigableString) and not isinstance(node, Comment):
            lines[-1] += str(node)
    return lines


def normalize_text(fragment: Tag | str) -> str:
    """Convert an element or a raw inner-markup fragment into trimmed plain text.

    <br> variants become newlines, remaining tags are stripped, &nbsp;
    placeholders become spaces and every line is trimmed. Applying this
    to already-normalized text returns it unchanged.
    """
    if isinstance(fragment, Tag):
        text = "\n".join(_element_lines(fragment))
    else:
        text = strip_tags(br_to_newlines(fragment))
    text = text.replace(NBSP_ENTITY, " ").replace(NBSP, " ")
    lines = [line.strip(" \t\r\f\v" + FULL_WIDTH_SPACE) for line in text.split("\n")]
    return "\n".join(lines).strip()


def normalize_spaces(text: str) -> str:
    """Collapse all whitespace runs (including full-width spaces) to one space."""
    return _ANY_SPACE.sub(" ", text.replace(FULL_WIDTH_SPACE, " ")).strip()


def is_placeholder(text: str | None) -> bool:
    """True for empty cells and cells holding only &nbsp; / full-width spaces."""
    if text is None:
        return True
    stripped = text.replace(NBSP_ENTITY, "").strip(" \t\r\n\f\v" + NBSP + FULL_WIDTH_SPACE)
    return stripped == ""


def optional_text(text: str | None) -> str | None:
    """Trimmed text, or None when the value is empty or a placeholder."""
    if is_placeholder(text):
        return None
    return text.replace(NBSP, " ").strip()


def element_text(element: Tag | None, separator: str = "") -> str:
    """Concatenated text of an element, trimmed; "" for a missing element."""
    if element is None:
        return ""
    return element.get_text(separator).replace(NBSP, " ").strip()


def cell_lines(element: Tag | str) -> list[str]:
    """Split a line-broken cell into its logical lines.

    The cell is split at its <br> elements (or, for raw markup, on <br>
    variants); each segment is reduced to text and its source whitespace
    collapsed, so indentation in the HTML source never produces extra
    lines. Empty segments are kept to preserve
    positions ("<br>Prof. A" -> ["", "Prof. A"]).
    """
    if isinstance(element, Tag):
        segments = _element_lines(element)
    else:
        segments = [strip_tags(seg) for seg in BR_TAG.split(element)]
    lines = [_HORIZONTAL_SPACE.sub(" ", seg) for seg in segments]
    lines = [_ANY_SPACE.sub(" ", line).strip() for line in lines]
    # Trailing empty segments come from a closing <br>
    while lines and not lines[-1]:
        lines.pop()
    return lines


def parse_int(text: str | None, default: int | None = None) -> int | None:
    """Best-effort integer parse ("1,024" -> 1024); default on failure."""
    if text is None:
        return default
    try:
        return int(text.strip().replace(",", ""))
    except ValueError:
        return default


def value_after_colon(line: str) -> str:
    """Text after the first half-width or full-width colon, trimmed."""
    match = _COLON.search(line)
    if not match:
        return line.strip()
    return line[match.end() :].strip()


def classify_by_keywords(text: str, rules, default):
    """Classify text by substring containment; first matching rule wins.

    rules is an ordered sequence of (keywords, value) pairs. Surrounding
    whitespace or annotations around a keyword do not matter.
    """
    for keywords, value in rules:
        if any(keyword in text for keyword in keywords):
            return value
    return default
