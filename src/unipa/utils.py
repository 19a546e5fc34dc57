"""Shared document utilities.

HTML parsing itself belongs to BeautifulSoup; extractors only ever receive
an already-parsed tree. load_document() is the single place raw markup is
turned into one, using the tree builder chosen in UnipaConfig.html_parser.
"""

from bs4 import BeautifulSoup

from src.unipa.config import get_config
from src.unipa.logging import get_logger

log = get_logger(__name__)


def load_document(html: str | bytes, parser: str | None = None) -> BeautifulSoup:
    """Parse raw page markup into a document tree.

    Args:
        html: Page markup as fetched from the portal.
        parser: BeautifulSoup tree builder; defaults to UNIPA_HTML_PARSER.

    Returns:
        Parsed document, ready for any extractor's parse_document().
    """
    parser = parser or get_config().html_parser
    document = BeautifulSoup(html, parser)
    log.debug("document_loaded", parser=parser, size=len(html))
    return document
