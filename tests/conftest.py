import pytest

from src.unipa.config import ExtractorOptions
from src.unipa.utils import load_document


@pytest.fixture
def parse():
    """Parse an HTML snippet into a document tree."""
    return load_document


@pytest.fixture
def options():
    return ExtractorOptions()


@pytest.fixture
def strict_options():
    return ExtractorOptions().with_strict_mode(True)
