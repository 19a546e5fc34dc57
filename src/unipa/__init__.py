"""UNIVERSAL PASSPORT page extraction.

Turns already-fetched portal pages (grades, assignments, syllabus, portal
notifications, classroom reservations, ...) into typed pydantic records.
Fetching and session handling stay with the caller.
"""

from src.unipa.config import ExtractorOptions, UnipaConfig, get_config
from src.unipa.errors import (
    DataExtractionFailed,
    DataParsingFailed,
    ElementNotFound,
    ExtractionError,
    MissingRequiredField,
    NotImplementedExtraction,
    RecordValidationError,
    SelectorCreationFailed,
)
from src.unipa.registry import EXTRACTORS, PageType, extract, get_extractor
from src.unipa.utils import load_document

__all__ = [
    "EXTRACTORS",
    "PageType",
    "extract",
    "get_extractor",
    "load_document",
    "ExtractorOptions",
    "UnipaConfig",
    "get_config",
    "ExtractionError",
    "SelectorCreationFailed",
    "ElementNotFound",
    "DataParsingFailed",
    "DataExtractionFailed",
    "NotImplementedExtraction",
    "RecordValidationError",
    "MissingRequiredField",
]
