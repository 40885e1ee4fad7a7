"""Request body parsing and field presence checks"""
import json
from typing import Iterable, Optional, Type, TypeVar

import pydantic
from pydantic import BaseModel

from app.errors import ValidationError

NO_IMAGE_MESSAGE = "No image data provided"
MISSING_FIELDS_MESSAGE = ValidationError.message
INVALID_BODY_MESSAGE = "Invalid request body"

RequestModel = TypeVar("RequestModel", bound=BaseModel)


def parse_body(raw: bytes, model: Type[RequestModel]) -> RequestModel:
    """
    Parse a raw request body as JSON into ``model``.

    The Content-Type header is ignored: clients that post JSON as
    text/plain are accepted.
    """
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationError(INVALID_BODY_MESSAGE) from e
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(INVALID_BODY_MESSAGE) from e


def require_fields(payload: BaseModel, fields: Iterable[str], message: Optional[str] = None) -> None:
    """
    Raise ValidationError if any of ``fields`` is absent, None or an empty string.

    No other checks (length, content type, tone value) are made here.
    """
    missing = [name for name in fields if getattr(payload, name, None) in (None, "")]
    if missing:
        raise ValidationError(message)
