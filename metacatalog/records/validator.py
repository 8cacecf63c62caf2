"""
Record validator turning raw YAML input into typed records.

Parses with PyYAML's BaseLoader so every scalar stays a string, then
checks the result against a pydantic schema. Failures are reported as
a structured list of offending field paths.
"""

from typing import List, Union

import yaml
from pydantic import AnyUrl, BaseModel, EmailStr, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from ..core import get_logger, RecordValidationError, UnparsableRecordError
from .models import Maintainer, Record

logger = get_logger(__name__)

_WEBSITE_ADAPTER = TypeAdapter(HttpUrl)
# Repositories may live behind git:// or ssh:// URLs
_SOURCE_ADAPTER = TypeAdapter(AnyUrl)
_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def _require_text(value: str) -> str:
    # Search terms must hold a non-blank query, so stored values must too
    if not value.strip():
        raise ValueError("value must not be blank")
    return value


def _check_format(adapter: TypeAdapter, value: str, message: str) -> str:
    try:
        adapter.validate_python(value)
    except ValidationError:
        raise ValueError(message)
    return value


class MaintainerSchema(BaseModel):
    """Schema for one maintainer entry."""
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)

    @field_validator("name", "email")
    @classmethod
    def _check_blank(cls, value: str) -> str:
        return _require_text(value)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return _check_format(_EMAIL_ADAPTER, value, "value is not a valid email address")


class RecordSchema(BaseModel):
    """
    Schema for a raw catalog record.

    URL and e-mail fields are checked for format but kept as written,
    so exact-match searches see the submitted value. Whitespace-only
    values are rejected.
    """
    title: str = Field(min_length=1)
    version: str = Field(min_length=1)
    maintainers: List[MaintainerSchema] = Field(min_length=1)
    company: str = Field(min_length=1)
    website: str = Field(min_length=1)
    source: str = Field(min_length=1)
    license: str = Field(min_length=1)
    description: str = Field(min_length=1)

    @field_validator("title", "version", "company", "website", "source", "license", "description")
    @classmethod
    def _check_blank(cls, value: str) -> str:
        return _require_text(value)

    @field_validator("website")
    @classmethod
    def _check_website(cls, value: str) -> str:
        return _check_format(_WEBSITE_ADAPTER, value, "value is not a valid http(s) URL")

    @field_validator("source")
    @classmethod
    def _check_source(cls, value: str) -> str:
        return _check_format(_SOURCE_ADAPTER, value, "value is not a valid URL")

    def to_record(self) -> Record:
        """Convert the validated schema into an immutable Record."""
        return Record(
            title=self.title,
            version=self.version,
            maintainers=tuple(
                Maintainer(name=m.name, email=m.email)
                for m in self.maintainers
            ),
            company=self.company,
            website=self.website,
            source=self.source,
            license=self.license,
            description=self.description,
        )


class RecordValidator:
    """
    Parses and validates raw records.

    Produces a Record or raises RecordValidationError listing the
    missing or invalid fields.
    """

    def validate(self, raw: Union[bytes, str]) -> Record:
        """
        Parse raw YAML into a validated record.

        Args:
            raw: YAML document as bytes or text.

        Returns:
            The validated Record.

        Raises:
            UnparsableRecordError: If the input is not a YAML mapping.
            RecordValidationError: If the mapping breaks the schema.
        """
        data = self._parse(raw)

        try:
            schema = RecordSchema.model_validate(data)
        except ValidationError as e:
            fields = schema_error_fields(e)
            raise RecordValidationError(
                "the following field(s) are missing or invalid: " + ",".join(fields),
                fields=fields
            )

        return schema.to_record()

    def _parse(self, raw: Union[bytes, str]) -> dict:
        """Decode and load the YAML document."""
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError:
                raise UnparsableRecordError()

        if not isinstance(raw, str):
            raise UnparsableRecordError(details={"type": type(raw).__name__})

        try:
            data = yaml.load(raw, Loader=yaml.BaseLoader)
        except yaml.YAMLError as e:
            logger.debug(f"YAML parse failure: {e}")
            raise UnparsableRecordError()

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise UnparsableRecordError(details={"type": type(data).__name__})

        return data


def schema_error_fields(error: ValidationError) -> List[str]:
    """
    Extract the field paths that failed schema validation.

    List indexes are rendered in brackets, e.g. maintainers[0].email.
    """
    fields = []
    for item in error.errors():
        path = ""
        for part in item["loc"]:
            if isinstance(part, int):
                path += f"[{part}]"
            elif path:
                path += f".{part}"
            else:
                path = str(part)
        if path and path not in fields:
            fields.append(path)
    return fields


_default_validator = RecordValidator()


def validate_record(raw: Union[bytes, str]) -> Record:
    """Validate raw input with the module-level validator."""
    return _default_validator.validate(raw)
