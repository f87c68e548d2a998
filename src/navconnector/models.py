# navconnector/models.py
"""
Pydantic models for normalized NAV service error responses.

NAV reports failures in one of a few shapes. Each shape is recognized by a
substring probe on the raw body and reduced to the same record:

    {'result': {...}, 'technicalValidationMessages': [...]}

with 'schemaValidationMessages' carried along when the service sent it.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

EXCEPTION_RESPONSE_TAG: str = 'GeneralExceptionResponse'
ERROR_RESPONSE_TAG: str = 'GeneralErrorResponse'

EXCEPTION_RESULT_FIELDS: tuple[str, ...] = ('funcCode', 'errorCode', 'message')
ERROR_RESPONSE_FIELDS: tuple[str, ...] = (
    'result',
    'schemaValidationMessages',
    'technicalValidationMessages',
)


class ResponseKind(Enum):
    """The shapes an error body can take."""

    EMPTY = 'empty'
    EXCEPTION = 'exception'
    ERROR = 'error'
    UNRECOGNIZED = 'unrecognized'


def detect_response_kind(body: str | None) -> ResponseKind:
    """
    Classify a raw error body by substring probe.

    The exception tag is checked before the error tag, and the probe runs on
    the unparsed text, so a tag name mentioned anywhere in the body counts.
    """
    if not body:
        return ResponseKind.EMPTY
    if EXCEPTION_RESPONSE_TAG in body:
        return ResponseKind.EXCEPTION
    if ERROR_RESPONSE_TAG in body:
        return ResponseKind.ERROR
    return ResponseKind.UNRECOGNIZED


def _pick(source: Any, keys: tuple[str, ...]) -> dict[str, Any]:
    """Return the subset of `keys` present in `source`; {} if it is not a mapping."""
    if not isinstance(source, Mapping):
        return {}
    return {key: source[key] for key in keys if key in source}


class NormalizedError(BaseModel):
    """
    Fixed-shape error payload attached to NavServiceError.

    Attributes:
        result: funcCode / errorCode / message as reported by NAV. Usually a
            dict; kept as sent when NAV returns text or a repeated element.
        schema_validation_messages: Schema validation details, only present
            for GeneralErrorResponse bodies that carry them.
        technical_validation_messages: Always a list, even when NAV sent a
            single message.
    """

    model_config = ConfigDict(populate_by_name=True)

    result: Any = Field(default_factory=dict)
    schema_validation_messages: Any | None = Field(
        None, alias='schemaValidationMessages'
    )
    technical_validation_messages: list[Any] = Field(
        default_factory=list, alias='technicalValidationMessages'
    )

    @field_validator('result', mode='before')
    @classmethod
    def coerce_result(cls, v: Any) -> Any:
        """An empty <result/> means no result; any other shape is kept as sent."""
        if v is None or v == '':
            return {}
        return v

    @field_validator('technical_validation_messages', mode='before')
    @classmethod
    def coerce_to_list(cls, v: Any) -> list[Any]:
        """Wrap a single message in a list; a missing or empty one becomes []."""
        if not v:
            return []
        if isinstance(v, list):
            return v
        return [v]

    @classmethod
    def empty(cls) -> 'NormalizedError':
        """Payload for an error response without a body."""
        return cls()

    @classmethod
    def from_exception_response(cls, decoded: Mapping[str, Any]) -> 'NormalizedError':
        """Keep only funcCode, errorCode and message of a GeneralExceptionResponse."""
        return cls(
            result=_pick(decoded.get(EXCEPTION_RESPONSE_TAG), EXCEPTION_RESULT_FIELDS)
        )

    @classmethod
    def from_error_response(cls, decoded: Mapping[str, Any]) -> 'NormalizedError':
        """Keep result and the validation messages of a GeneralErrorResponse."""
        return cls.model_validate(
            _pick(decoded.get(ERROR_RESPONSE_TAG), ERROR_RESPONSE_FIELDS)
        )

    @classmethod
    def from_unrecognized(cls, body: str) -> 'NormalizedError':
        """Wrap a body of unknown shape as the result message."""
        return cls(result={'message': body})

    def to_payload(self) -> dict[str, Any]:
        """Dump with NAV field names, omitting schemaValidationMessages when unset."""
        payload: dict[str, Any] = {'result': self.result}
        if self.schema_validation_messages is not None:
            payload['schemaValidationMessages'] = self.schema_validation_messages
        payload['technicalValidationMessages'] = self.technical_validation_messages
        return payload
