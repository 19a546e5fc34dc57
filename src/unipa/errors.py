"""Error hierarchy for page extraction failures.

Every extractor raises a subclass of ExtractionError. Errors are structured:
they carry the failing selector, field name and context so callers can log
exactly which record or anchor could not be produced.

Kinds:
    StructureError          - a selector failed to compile, or a required anchor is missing
    DataShapeError          - an element was found but its text could not be parsed
    NotImplementedExtraction - the page type is recognised but not implemented yet
    RecordValidationError   - a built record failed an invariant check

Optional content never raises; absence becomes None or a default value.

Example usage:
    try:
        record = extractor.parse_document(document)
    except ExtractionError as e:
        log.warning("extraction_failed", **e.details())
"""

from typing import Any


class ExtractionError(Exception):
    """Base exception for all extraction errors."""

    def __init__(
        self,
        message: str,
        *,
        page_type: str | None = None,
        selector: str | None = None,
        field: str | None = None,
        context: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.page_type = page_type
        self.selector = selector
        self.field = field
        self.context = context

    def details(self) -> dict[str, Any]:
        """Structured view of the error for logging (None values dropped)."""
        data: dict[str, Any] = {"error": type(self).__name__, "message": self.message}
        for key, value in vars(self).items():
            if key != "message" and value is not None:
                data[key] = value
        return data

    def with_page_type(self, page_type: str) -> "ExtractionError":
        """Attach the page type of the extractor that surfaced this error."""
        if self.page_type is None:
            self.page_type = page_type
        return self


class StructureError(ExtractionError):
    """The document structure does not provide what the extractor needs.

    Examples: invalid CSS selector, required results table missing.
    """

    pass


class SelectorCreationFailed(StructureError):
    """A CSS selector could not be compiled."""

    def __init__(self, selector: str, context: str, **kwargs: Any) -> None:
        super().__init__(
            f"Failed to create selector '{selector}': {context}",
            selector=selector,
            context=context,
            **kwargs,
        )


class ElementNotFound(StructureError):
    """A required anchor element is entirely absent from the document."""

    def __init__(self, selector: str, context: str, **kwargs: Any) -> None:
        super().__init__(
            f"Element not found: {selector} ({context})",
            selector=selector,
            context=context,
            **kwargs,
        )


class DataShapeError(ExtractionError):
    """An element was found but its content has an unexpected shape.

    Examples: non-numeric credit count in a required field, unreadable row.
    """

    pass


class DataParsingFailed(DataShapeError):
    """A found value could not be parsed into the expected scalar type."""

    def __init__(self, data_type: str, value: str, **kwargs: Any) -> None:
        kwargs.setdefault("field", data_type)
        super().__init__(f"Failed to parse {data_type}: '{value}'", **kwargs)
        self.data_type = data_type
        self.value = value


class DataExtractionFailed(DataShapeError):
    """A sub-record (usually one table row) could not be extracted."""

    def __init__(self, data_type: str, reason: str, **kwargs: Any) -> None:
        kwargs.setdefault("field", data_type)
        super().__init__(f"Failed to extract {data_type}: {reason}", **kwargs)
        self.data_type = data_type
        self.reason = reason


class NotImplementedExtraction(ExtractionError):
    """Page type is recognised but its extraction routine is a stub.

    Stubs fail closed so completing one shows up as a visible change.
    """

    def __init__(self, operation: str, **kwargs: Any) -> None:
        super().__init__(f"Not implemented: {operation}", **kwargs)
        self.operation = operation


class RecordValidationError(ExtractionError):
    """A constructed record failed a completeness or cross-field check."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("context", "Validation")
        super().__init__(f"Failed to validate record: {message}", **kwargs)
        self.reason = message


class MissingRequiredField(RecordValidationError):
    """A builder was asked to build a record without one of its required fields."""

    def __init__(self, field_name: str, **kwargs: Any) -> None:
        super().__init__(f"missing required field '{field_name}'", field=field_name, **kwargs)
