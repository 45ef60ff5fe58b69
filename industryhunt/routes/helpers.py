"""Request parsing and error helpers shared by the API routers."""

import logging
from datetime import datetime
from typing import Annotated, TypeVar

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StringConstraints, field_validator
from pydantic import ValidationError as SchemaValidationError

from industryhunt.core.errors import ValidationError

logger = logging.getLogger(__name__)

BodyT = TypeVar('BodyT', bound=BaseModel)

# Required text field: surrounding whitespace is dropped and empty is rejected.
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


async def read_json_body(request: Request) -> dict:
    payload = await request.json()
    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object')
    return payload


def require_string(payload: dict, field: str, message: str) -> str:
    value = payload.get(field)
    if not value or not isinstance(value, str):
        raise ValidationError(message)
    return value


def require_param(value: str | None, name: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f'Missing required parameter: {name}')
    return value.strip()


def parse_body(model: type[BodyT], payload: dict, message: str) -> BodyT:
    """Validate ``payload`` against ``model``; any failure is a 400 with ``message``."""
    try:
        return model.model_validate(payload)
    except SchemaValidationError as exc:
        logger.info('Rejected %s body: %s', model.__name__, exc.errors(include_url=False))
        raise ValidationError(message) from exc


def changes_from(model: type[BaseModel], payload: dict, message: str) -> dict:
    """Fields present in a partial update body, validated against ``model``."""
    return parse_body(model, payload, message).model_dump(exclude_unset=True)


def server_error(message: str) -> JSONResponse:
    logger.exception(message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'error': message},
    )


class DeadlineFields(BaseModel):
    """Optional ``deadline``; an empty string clears it."""
    deadline: datetime | None = None

    @field_validator('deadline', mode='before')
    @classmethod
    def blank_deadline(cls, value):
        return value or None
