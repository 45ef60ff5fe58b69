"""
HTTP plumbing shared by the Supabase auth client and the PostgREST store.
"""

import logging

import httpx

from industryhunt.core.errors import CollaboratorError

logger = logging.getLogger(__name__)

# GoTrue and PostgREST disagree on where the human readable message lives.
ERROR_MESSAGE_KEYS = ('msg', 'error_description', 'message', 'error')
ERROR_CODE_KEYS = ('error_code', 'code', 'error')


def _first_present(payload: dict, keys: tuple[str, ...]):
    for key in keys:
        value = payload.get(key)
        if value not in (None, ''):
            return value
    return None


def raise_for_supabase_error(response: httpx.Response) -> None:
    """Turn an error response from Supabase into a CollaboratorError."""
    if response.is_success:
        return

    try:
        payload = response.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    message = _first_present(payload, ERROR_MESSAGE_KEYS) or response.text or response.reason_phrase
    code = _first_present(payload, ERROR_CODE_KEYS)
    logger.warning(
        'Supabase %s %s failed with %s: %s',
        response.request.method,
        response.request.url.path,
        response.status_code,
        message,
    )
    raise CollaboratorError(
        str(message),
        code=str(code) if code is not None else None,
        status_code=response.status_code,
    )


def build_http_client(
    base_url: str,
    api_key: str,
    *,
    timeout: float,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    if not base_url:
        raise RuntimeError('SUPABASE_URL is not defined')
    return httpx.Client(
        base_url=base_url,
        headers={'apikey': api_key},
        timeout=timeout,
        transport=transport,
    )
