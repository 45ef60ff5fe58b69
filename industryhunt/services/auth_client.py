"""
Authentication collaborator: the Supabase GoTrue REST API.
"""

from typing import Protocol

import httpx

from industryhunt.schemas import AuthResult, AuthSession, AuthUser
from industryhunt.services.supabase import build_http_client, raise_for_supabase_error


class AuthClient(Protocol):
    def reset_password_for_email(self, email: str, redirect_to: str | None = None) -> None:
        ...

    def update_password(self, access_token: str, password: str) -> None:
        ...

    def sign_up(self, email: str, password: str) -> AuthResult:
        ...

    def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        ...

    def sign_out(self, access_token: str | None) -> None:
        ...

    def resend_signup_confirmation(self, email: str) -> None:
        ...

    def get_user(self, access_token: str) -> AuthUser:
        ...


def _bearer(access_token: str) -> dict:
    return {'Authorization': f'Bearer {access_token}'}


def _parse_auth_result(payload: dict) -> AuthResult:
    # Sign in always returns a session; sign up returns a bare user while the
    # address still needs confirming.
    if 'access_token' in payload:
        return AuthResult(
            user=AuthUser.model_validate(payload['user']) if payload.get('user') else None,
            session=AuthSession.model_validate(payload),
        )
    if payload.get('id'):
        return AuthResult(user=AuthUser.model_validate(payload))
    if payload.get('user'):
        return AuthResult(user=AuthUser.model_validate(payload['user']))
    return AuthResult()


class SupabaseAuthClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._http = build_http_client(base_url, api_key, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def reset_password_for_email(self, email: str, redirect_to: str | None = None) -> None:
        params = {'redirect_to': redirect_to} if redirect_to else None
        response = self._http.post('/auth/v1/recover', params=params, json={'email': email})
        raise_for_supabase_error(response)

    def update_password(self, access_token: str, password: str) -> None:
        response = self._http.put(
            '/auth/v1/user',
            json={'password': password},
            headers=_bearer(access_token),
        )
        raise_for_supabase_error(response)

    def sign_up(self, email: str, password: str) -> AuthResult:
        response = self._http.post('/auth/v1/signup', json={'email': email, 'password': password})
        raise_for_supabase_error(response)
        return _parse_auth_result(response.json())

    def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        response = self._http.post(
            '/auth/v1/token',
            params={'grant_type': 'password'},
            json={'email': email, 'password': password},
        )
        raise_for_supabase_error(response)
        return _parse_auth_result(response.json())

    def sign_out(self, access_token: str | None) -> None:
        if not access_token:
            return
        response = self._http.post('/auth/v1/logout', headers=_bearer(access_token))
        raise_for_supabase_error(response)

    def resend_signup_confirmation(self, email: str) -> None:
        response = self._http.post('/auth/v1/resend', json={'type': 'signup', 'email': email})
        raise_for_supabase_error(response)

    def get_user(self, access_token: str) -> AuthUser:
        response = self._http.get('/auth/v1/user', headers=_bearer(access_token))
        raise_for_supabase_error(response)
        return AuthUser.model_validate(response.json())
