"""Explicit request validation returning a tagged result.

Schemas are plain Pydantic models. ``validate`` never raises for bad input:
it returns ``Valid`` carrying the parsed model or ``Invalid`` carrying a list
of field errors. Routes that want the exception form call ``require_valid``.
"""

import json
from dataclasses import dataclass
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, StringConstraints
from pydantic import ValidationError as PydanticValidationError

from shared.errors import RequestValidationFailed

SchemaT = TypeVar("SchemaT", bound=BaseModel)


# A string that is present and not just whitespace; surrounding spaces are stripped.
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def bounded_text(max_length: int, min_length: int = 1):
    """A stripped, non-blank string of at most ``max_length`` characters."""
    return Annotated[str, StringConstraints(strip_whitespace=True, min_length=min_length, max_length=max_length)]


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class Valid(Generic[SchemaT]):
    value: SchemaT

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    errors: tuple[FieldError, ...]

    @property
    def ok(self) -> bool:
        return False

    def fields(self) -> set[str]:
        return {error.field for error in self.errors}


def _field_errors(exc: PydanticValidationError):
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "__root__"
        if err["type"] == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        yield FieldError(field=field, message=message)


def validate(schema: type[SchemaT], payload: Any) -> Valid[SchemaT] | Invalid:
    """Check ``payload`` against ``schema`` without raising."""
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return Invalid(errors=(FieldError(field="__root__", message="Request body must be a JSON object"),))

    try:
        value = schema.model_validate(payload)
    except PydanticValidationError as exc:
        return Invalid(errors=tuple(_field_errors(exc)))
    return Valid(value=value)


def require_valid(schema: type[SchemaT], payload: Any) -> SchemaT:
    """Return the parsed model, or raise ``RequestValidationFailed``."""
    result = validate(schema, payload)
    if isinstance(result, Invalid):
        raise RequestValidationFailed(result.errors)
    return result.value


async def read_payload(request) -> Any:
    """Decode a request's JSON body; an empty body reads as ``None``."""
    body = await request.body()
    if not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError:
        raise RequestValidationFailed(
            (FieldError(field="__root__", message="Request body must be valid JSON"),)
        ) from None
