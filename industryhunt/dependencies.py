"""
Dependency wiring for the FastAPI app.

Collaborator clients are built lazily, once per process, and handed to the
route handlers through ``Depends``. Tests swap them out with
``app.dependency_overrides`` or by passing fakes to the handlers directly.
"""

import logging
from threading import Lock

from industryhunt.core import config
from industryhunt.database import SessionLocal
from industryhunt.services.auth_client import AuthClient, SupabaseAuthClient
from industryhunt.services.rest_store import RestDataStore
from industryhunt.services.sql_store import SqlDataStore
from industryhunt.services.store import DataStore

logger = logging.getLogger(__name__)

_clients_lock = Lock()
_auth_client: AuthClient | None = None
_data_store: DataStore | None = None


def get_auth_client() -> AuthClient:
    global _auth_client

    if _auth_client:
        return _auth_client

    with _clients_lock:
        if _auth_client:
            return _auth_client

        _auth_client = SupabaseAuthClient(
            config.SUPABASE_URL,
            config.SUPABASE_ANON_KEY,
            timeout=config.SUPABASE_TIMEOUT_SECONDS,
        )
        return _auth_client


def _build_data_store() -> DataStore:
    if config.DATA_STORE == 'rest':
        if not config.SUPABASE_SERVICE_ROLE_KEY:
            logger.warning('SUPABASE_SERVICE_ROLE_KEY not set; falling back to the anon key.')
        return RestDataStore(
            config.SUPABASE_URL,
            config.SUPABASE_SERVICE_ROLE_KEY or config.SUPABASE_ANON_KEY,
            timeout=config.SUPABASE_TIMEOUT_SECONDS,
        )
    return SqlDataStore(SessionLocal)


def get_data_store() -> DataStore:
    global _data_store

    if _data_store:
        return _data_store

    with _clients_lock:
        if _data_store:
            return _data_store

        _data_store = _build_data_store()
        logger.info('Using %s data store', type(_data_store).__name__)
        return _data_store


def reset_clients() -> None:
    """Close and forget the cached clients so the next request rebuilds them."""
    global _auth_client, _data_store

    with _clients_lock:
        for client in (_auth_client, _data_store):
            close = getattr(client, 'close', None)
            if close:
                close()
        _auth_client = None
        _data_store = None
