"""Common Pydantic models shared across modules."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def coerce_status_code(value: Any) -> int | None:
    """Pass integers through, parse numeric strings, drop everything else."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def join_messages(value: Any) -> Any:
    """Collapse a list of messages into a single comma-separated string."""

    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return value


class ErrorDetail(BaseModel):
    """Structured failure description, for transport and server errors alike."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status_code: int | None = Field(default=None, alias="statusCode")
    message: str | None = None
    error_tag: str | None = Field(default=None, alias="error")
    data: Any = None

    @field_validator("status_code", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> int | None:
        return coerce_status_code(value)

    @field_validator("message", mode="before")
    @classmethod
    def _join_message_list(cls, value: Any) -> Any:
        value = join_messages(value)
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("error_tag", mode="before")
    @classmethod
    def _stringify_tag(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "ErrorDetail":
        return cls.model_validate(dict(payload))

    def to_json(self) -> dict[str, Any]:
        return {
            "statusCode": self.status_code,
            "message": self.message,
            "error": self.error_tag,
            "data": self.data,
        }

    def __str__(self) -> str:
        return f"{self.status_code}, {self.message}, {self.error_tag}, {self.data}"


class Meta(BaseModel):
    """Pagination descriptor nested under ``data.meta``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total: int | None = None
    page: int | None = None
    limit: int | None = None
    total_pages: int | None = Field(default=None, alias="totalPages")
    has_next_page: bool | None = Field(default=None, alias="hasNextPage")
    has_previous_page: bool | None = Field(default=None, alias="hasPreviousPage")

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "Meta":
        return cls.model_validate(dict(payload))

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class MultipartFile(BaseModel):
    """One local file to upload as a multipart part."""

    model_config = {"populate_by_name": True}

    file_path: str = Field(validation_alias=AliasChoices("file_path", "filePath"))
    field_name: str = Field(
        default="",
        validation_alias=AliasChoices("field_name", "fieldName", "apiKey"),
    )

    @property
    def resolved_field_name(self) -> str:
        """Multipart key for this part; servers commonly expect ``file``."""

        return self.field_name or "file"

    @property
    def filename(self) -> str:
        """Last path segment of the local path."""

        return PurePosixPath(self.file_path.replace("\\", "/")).name
