"""Exception hierarchy for the export pipeline.

Every failure is terminal: adapters translate library exceptions (httpx,
json, yaml, pydantic, OSError) into one of these classes and the CLI maps
any `ExportError` to a non-zero exit status.
"""

from __future__ import annotations

from typing import Any

CONFIG_STAGE = "config"
SETTINGS_STAGE = "settings"


class ExportError(Exception):
    """Base class for every fatal error raised while exporting.

    Attributes:
        message: Human-readable description of what went wrong
        stage: Pipeline stage that failed (`config`, `prelogin`, `token`, ...)
        cause: Underlying library exception, if any
    """

    def __init__(self, message: str, *, stage: Any, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        # Accept both `Stage` members and plain strings.
        self.stage = str(getattr(stage, "value", stage))
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.stage} failed: {self.message}"


class ConfigReadError(ExportError):
    """The configuration file could not be read."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message, stage=CONFIG_STAGE, cause=cause)


class ConfigParseError(ExportError):
    """The configuration document is not valid YAML or misses required fields."""

    def __init__(
        self,
        message: str,
        *,
        fields: list[str] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, stage=CONFIG_STAGE, cause=cause)
        self.fields = fields or []


class NetworkError(ExportError):
    """Connection-level failure (DNS, refused, TLS, protocol)."""


class RequestTimeoutError(NetworkError):
    """The request did not complete within the configured timeout."""


class ResponseDecodeError(ExportError):
    """The response body is not valid JSON."""


class MissingFieldError(ExportError):
    """A required field is absent from a response document."""

    def __init__(
        self,
        message: str,
        *,
        stage: Any,
        field: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, stage=stage, cause=cause)
        self.field = field


class FileWriteError(ExportError):
    """An artifact could not be written to the output directory."""


class SettingsError(ExportError):
    """An application setting from the environment or `.env` is invalid."""

    def __init__(
        self,
        message: str,
        *,
        fields: list[str] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, stage=SETTINGS_STAGE, cause=cause)
        self.fields = fields or []
