"""Extraction contracts implemented by every page extractor.

PageExtractor
    parse_document(document) -> record, for one page type. The document is
    already parsed; extractors never re-parse it. PAGE_TYPE identifies the
    page for logging and routing only.

SectionExtractor
    One optional, self-contained region (a popup, a detail panel).
    section_exists() never raises; parse_section() may.

RecordBuilder
    Immutable staged construction: set() returns a new builder, build()
    checks completeness and invariants, validate() re-checks a built record.

NotImplementedExtractor
    Recognised page types whose routine is still a stub. They fail closed
    with NotImplementedExtraction rather than returning empty data.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar, Generic, Self, TypeVar

from bs4 import Tag
from pydantic import BaseModel, ValidationError

from src.unipa.config import ExtractorOptions
from src.unipa.errors import (
    ElementNotFound,
    ExtractionError,
    MissingRequiredField,
    NotImplementedExtraction,
    RecordValidationError,
)
from src.unipa.locators import select_first
from src.unipa.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class PageExtractor(ABC, Generic[T]):
    """Extracts one page type into one record."""

    PAGE_TYPE: ClassVar[str]

    def __init__(self, options: ExtractorOptions | None = None) -> None:
        self.options = options or ExtractorOptions.from_config()

    @property
    def strict(self) -> bool:
        return self.options.strict_mode

    def parse_document(self, document: Tag) -> T:
        """Extract the page record from an already-parsed document.

        Raises:
            ExtractionError: A required anchor is missing or a required value
                could not be parsed. The error is tagged with PAGE_TYPE.
        """
        try:
            record = self.extract(document)
        except ExtractionError as e:
            e.with_page_type(self.PAGE_TYPE)
            log.warning("page_extraction_failed", **e.details())
            raise
        log.debug("page_extracted", page_type=self.PAGE_TYPE, record=type(record).__name__)
        return record

    @abstractmethod
    def extract(self, document: Tag) -> T:
        """Page-specific extraction algorithm."""

    def debug(self, event: str, **context: Any) -> None:
        """Debug event emitted only in debug mode; never affects output."""
        if self.options.debug_mode:
            log.debug(event, page_type=self.PAGE_TYPE, **context)


class NotImplementedExtractor(PageExtractor[BaseModel]):
    """Recognised page type whose extraction routine is not written yet."""

    OPERATION: ClassVar[str] = ""

    def extract(self, document: Tag) -> BaseModel:
        raise NotImplementedExtraction(self.OPERATION or self.PAGE_TYPE)


class SectionExtractor(ABC, Generic[T]):
    """Extracts one optional region of a page."""

    NAME: ClassVar[str]
    SELECTORS: ClassVar[tuple[str, ...]]

    def locate(self, scope: Tag) -> Tag | None:
        return select_first(scope, self.SELECTORS)

    def section_exists(self, scope: Tag) -> bool:
        """Whether the section is present. Never raises."""
        try:
            return self.locate(scope) is not None
        except ExtractionError as e:
            log.debug("section_lookup_failed", section=self.NAME, **e.details())
            return False

    def parse_section(self, scope: Tag) -> T:
        section = self.locate(scope)
        if section is None:
            raise ElementNotFound(", ".join(self.SELECTORS), self.NAME)
        return self.extract(section)

    def extract_optional(self, scope: Tag) -> T | None:
        """Section record, or None when the section is absent."""
        if not self.section_exists(scope):
            return None
        return self.parse_section(scope)

    @abstractmethod
    def extract(self, section: Tag) -> T:
        """Extract the record from the located section element."""


class RecordBuilder(Generic[T]):
    """Immutable staged builder for a record type.

        builder = PaginationBuilder().set(current_page=2).set(total_pages=5)
        record = builder.build()

    Subclasses set RECORD, optionally REQUIRED, and override check() for
    cross-field invariants.
    """

    RECORD: ClassVar[type[BaseModel]]
    REQUIRED: ClassVar[tuple[str, ...]] = ()

    def __init__(self, fields: Mapping[str, Any] | None = None) -> None:
        self._fields = MappingProxyType(dict(fields or {}))

    @property
    def fields(self) -> Mapping[str, Any]:
        return self._fields

    def set(self, **fields: Any) -> Self:
        """New builder with the given fields added or replaced."""
        return type(self)({**self._fields, **fields})

    def build(self) -> T:
        """Assemble and validate the record.

        Raises:
            MissingRequiredField: A REQUIRED field was never set.
            RecordValidationError: Field types or invariants do not hold.
        """
        record_name = self.RECORD.__name__
        for name in self.REQUIRED:
            if name not in self._fields:
                raise MissingRequiredField(name, context=record_name)
        try:
            record = self.RECORD(**self._fields)
        except ValidationError as e:
            raise RecordValidationError(
                f"{record_name}: {e.error_count()} invalid field(s)",
                field=".".join(str(p) for p in e.errors()[0]["loc"]),
                context=record_name,
            ) from e
        self.validate(record)
        return record

    def validate(self, record: T) -> None:
        """Re-check invariants of an already-built record."""
        problems = self.check(record)
        if problems:
            raise RecordValidationError("; ".join(problems), context=self.RECORD.__name__)

    def check(self, record: T) -> list[str]:
        """Cross-field invariant violations of record (empty when valid)."""
        return []
