"""Configuration models for the JSON node editor."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class FormattingConfig(BaseModel):
    """Formatting applied to structure inserted by a commit."""

    tab_size: int = Field(2, description="Indent width used for inserted structure", ge=1, le=8)
    insert_spaces: bool = Field(True, description="Indent with spaces instead of tabs")
    eol: Optional[str] = Field(
        None,
        description="Line ending for inserted structure; detected from the document when unset"
    )

    @field_validator('eol')
    @classmethod
    def validate_eol(cls, v):
        """Validate that the line ending is LF or CRLF."""
        if v is not None and v not in {"\n", "\r\n"}:
            raise ValueError("EOL must be '\\n' or '\\r\\n'")
        return v

    @property
    def indent_unit(self) -> str:
        return " " * self.tab_size if self.insert_spaces else "\t"


class LoggingConfig(BaseModel):
    """Configuration for logging output."""

    log_level: str = Field("INFO", description="Logging level")
    log_file: Optional[str] = Field(None, description="Optional rotating log file path")
    enable_json_logging: bool = Field(False, description="Emit structured JSON log lines")
    enable_error_tracking: bool = Field(True, description="Track error counts and patterns")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate that log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(sorted(valid_levels))}")
        return v.upper()


class EditorConfig(BaseModel):
    """Main configuration container for the JSON node editor."""

    formatting: FormattingConfig = Field(
        default_factory=FormattingConfig,
        description="Formatting configuration for committed edits"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration"
    )
    max_document_size: int = Field(
        10485760,  # 10MB
        description="Maximum document size in bytes accepted by a commit",
        ge=2,
        le=1073741824  # 1GB maximum
    )

    model_config = {
        "validate_assignment": True,
        "extra": "forbid",  # Forbid extra fields
    }
