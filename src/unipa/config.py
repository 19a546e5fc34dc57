"""Extractor configuration loaded from environment variables.

Two layers:
    UnipaConfig       - process-wide settings (env / .env), read once
    ExtractorOptions  - immutable per-extractor options, built fluently
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings


class UnipaConfig(BaseSettings):
    """Extraction configuration loaded from environment variables.

    Settings are loaded from UNIPA_* environment variables with sensible
    defaults. For local development, create a .env file in the project root.
    """

    # Extractor defaults
    debug_mode: bool = Field(
        default=False,
        description="Emit extra debug events during extraction (output unchanged)",
    )
    strict_mode: bool = Field(
        default=False,
        description="Escalate tolerated fallbacks into errors where supported",
    )

    # Document loading
    html_parser: str = Field(
        default="html.parser",
        description="BeautifulSoup tree builder (html.parser, lxml, html5lib)",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "UNIPA_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: UnipaConfig | None = None


def get_config() -> UnipaConfig:
    """Get the extraction configuration singleton.

    Returns:
        UnipaConfig: Extraction configuration instance
    """
    global _config
    if _config is None:
        _config = UnipaConfig()
    return _config


class ExtractorOptions(BaseModel):
    """Construction-time options shared by every extractor.

    Immutable: the with_* methods return a new instance, so one options
    value can be shared between extractors without coordination.

        options = ExtractorOptions().with_debug_mode(True).with_strict_mode(True)
    """

    model_config = ConfigDict(frozen=True)

    debug_mode: bool = False  # extra debug log events, never changes output
    strict_mode: bool = False  # escalate specific tolerated fallbacks into errors

    @classmethod
    def from_config(cls, config: UnipaConfig | None = None) -> "ExtractorOptions":
        """Seed options from the environment configuration."""
        config = config or get_config()
        return cls(debug_mode=config.debug_mode, strict_mode=config.strict_mode)

    def with_debug_mode(self, enabled: bool) -> "ExtractorOptions":
        return self.model_copy(update={"debug_mode": enabled})

    def with_strict_mode(self, enabled: bool) -> "ExtractorOptions":
        return self.model_copy(update={"strict_mode": enabled})
