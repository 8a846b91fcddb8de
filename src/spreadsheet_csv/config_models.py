"""
Pydantic models for strongly-typed configuration validation.

ParseOptions is the immutable snapshot a tokenizer works with; ReaderConfig
is the file-level configuration loaded from JSON for the reader and CLI.
"""

from typing import Any, FrozenSet, List, Optional

from pydantic import BaseModel, Field, field_validator

from spreadsheet_csv.temporal import (
    DEFAULT_DATE_TIME,
    DateTimeFormat,
    PatternDateTimeFormat,
    resolve_formatter,
)

# Shared read-only defaults
DEFAULT_NULL: FrozenSet[str] = frozenset({"null"})
QUOTE_CHARS = ('"', "'")


def _check_delimiter(value: str) -> str:
    if value in QUOTE_CHARS:
        raise ValueError(f"Delimiter may not be a quote character: {value!r}")
    return value


class ParseOptions(BaseModel):
    """Tokenizer configuration for one or more parse calls."""
    delimiter: str = Field(",", min_length=1, max_length=1, description="Field delimiter character")
    numbered_text: bool = Field(False, description="Parse quoted numeric text as numbers")
    formatter: DateTimeFormat = Field(DEFAULT_DATE_TIME, description="Format for date/time inference")
    null_values: FrozenSet[str] = Field(DEFAULT_NULL, description="Unquoted tokens read as null")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, value):
        """Reject delimiters that would be read as an opening quote."""
        return _check_delimiter(value)

    @field_validator("formatter", mode="before")
    @classmethod
    def resolve_format(cls, value):
        """Accept a strptime pattern in place of a DateTimeFormat."""
        try:
            return resolve_formatter(value)
        except TypeError as e:
            raise ValueError(str(e))  # noqa: B904

    @field_validator("null_values", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        """Treat a missing null set as no null words at all."""
        return frozenset() if value is None else value


class ReaderConfig(BaseModel):
    """Configuration for reading delimited files line by line."""
    encoding: str = Field("utf-8", description="Input file encoding")
    delimiter: str = Field(",", min_length=1, max_length=1, description="Field delimiter character")
    numbered_text: bool = Field(False, description="Parse quoted numeric text as numbers")
    date_format: Optional[str] = Field(
        None,
        description="strptime pattern for dates (None = ISO date/time)"
    )
    null_values: List[str] = Field(
        default_factory=lambda: sorted(DEFAULT_NULL),
        description="Unquoted tokens read as null"
    )
    skip_blank_lines: bool = Field(False, description="Skip blank physical lines")
    progress_interval: int = Field(10000, description="Log progress every N rows", gt=0)

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, value):
        """Reject delimiters that would be read as an opening quote."""
        return _check_delimiter(value)

    @field_validator("date_format")
    @classmethod
    def validate_date_format(cls, value):
        """Ensure the pattern can build a format."""
        if value is not None:
            PatternDateTimeFormat(value)
        return value

    def parse_options(self) -> ParseOptions:
        """Build the tokenizer options described by this configuration."""
        return ParseOptions(
            delimiter=self.delimiter,
            numbered_text=self.numbered_text,
            formatter=self.date_format,
            null_values=frozenset(self.null_values),
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ReaderConfig":
        """
        Create ReaderConfig from dictionary with validation.

        Args:
            config_dict: Configuration dictionary (loaded from JSON)

        Returns:
            Validated ReaderConfig instance

        Raises:
            ValidationError: If configuration is invalid
        """
        return cls.model_validate(config_dict)

    @classmethod
    def from_json_file(cls, config_path: Any) -> "ReaderConfig":
        """
        Load and validate configuration from JSON file.

        Args:
            config_path: Path to JSON configuration file

        Returns:
            Validated ReaderConfig instance

        Raises:
            ValidationError: If configuration is invalid
            FileNotFoundError: If file doesn't exist
        """
        import json
        from pathlib import Path

        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, encoding='utf-8') as f:
            config_dict = json.load(f)

        return cls.from_dict(config_dict)
