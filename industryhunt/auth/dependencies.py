import logging

import jwt
from fastapi import Depends, Request
from pydantic import ValidationError as SchemaValidationError

from industryhunt.auth import jwt_handler
from industryhunt.core import config
from industryhunt.core.errors import CollaboratorError
from industryhunt.dependencies import get_data_store
from industryhunt.schemas import UserRecord
from industryhunt.services.store import DataStore

logger = logging.getLogger(__name__)


def resolve_session_user(access_token: str | None, store: DataStore) -> UserRecord | None:
    """Return the stored user behind a Supabase access token, or None.

    A token that fails verification, or a user row that cannot be loaded,
    leaves the visitor signed out.
    """
    if not access_token:
        return None
    try:
        payload = jwt_handler.decode_access_token(access_token)
    except jwt.PyJWTError as exc:
        logger.info("Rejected session token: %s", exc)
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None
    try:
        return store.get_user(user_id)
    except (CollaboratorError, SchemaValidationError):
        logger.exception("Failed to load session user %s", user_id)
        return None


def get_session_user(
    request: Request,
    store: DataStore = Depends(get_data_store),
) -> UserRecord | None:
    return resolve_session_user(request.cookies.get(config.ACCESS_TOKEN_COOKIE), store)
