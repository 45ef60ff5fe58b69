import asyncio
import json
import time

import httpx

from industryhunt.models.roles import UserRole
from industryhunt.routes import auth_routes
from industryhunt.schemas import AuthResult, AuthSession, AuthUser
from industryhunt.services.auth_client import SupabaseAuthClient


class _FakeRequest:
    def __init__(self, *, body=None, cookies=None, base_url: str = 'http://localhost:8000/', raw_error=None):
        self._body = body if body is not None else {}
        self._raw_error = raw_error
        self.cookies = cookies or {}
        self.base_url = _Url(base_url)

    async def json(self):
        if self._raw_error is not None:
            raise self._raw_error
        return self._body


class _Url:
    def __init__(self, value: str):
        self.value = value

    def __str__(self) -> str:
        return self.value


def _body(response) -> dict:
    return json.loads(response.body)


def _set_cookies(response) -> list[str]:
    return [value.decode() for name, value in response.raw_headers if name == b'set-cookie']


def test_reset_password_returns_success_and_passes_redirect(auth_client) -> None:
    request = _FakeRequest(body={'email': 'student@example.com'})

    result = asyncio.run(auth_routes.reset_password(request, auth_client=auth_client))

    assert result == {'success': True}
    assert auth_client.calls == [
        ('reset_password_for_email', 'student@example.com', 'http://localhost:8000/auth/reset-password'),
    ]


def test_reset_password_rejects_missing_email(auth_client) -> None:
    response = asyncio.run(auth_routes.reset_password(_FakeRequest(body={}), auth_client=auth_client))

    assert response.status_code == 400
    assert _body(response) == {'error': 'Email is required'}
    assert auth_client.calls == []


def test_reset_password_rejects_non_string_email(auth_client) -> None:
    response = asyncio.run(auth_routes.reset_password(_FakeRequest(body={'email': 42}), auth_client=auth_client))

    assert response.status_code == 400
    assert auth_client.calls == []


def test_reset_password_forwards_collaborator_message(auth_client, collaborator_error) -> None:
    auth_client.error = collaborator_error('For security purposes, you can only request this once every 60 seconds')

    response = asyncio.run(
        auth_routes.reset_password(_FakeRequest(body={'email': 'student@example.com'}), auth_client=auth_client)
    )

    assert response.status_code == 400
    assert _body(response) == {'error': 'For security purposes, you can only request this once every 60 seconds'}


def test_reset_password_reports_unexpected_errors_as_500(auth_client) -> None:
    auth_client.error = RuntimeError('connection reset')

    response = asyncio.run(
        auth_routes.reset_password(_FakeRequest(body={'email': 'student@example.com'}), auth_client=auth_client)
    )

    assert response.status_code == 500
    assert _body(response) == {'error': 'connection reset'}


def test_reset_password_uses_fallback_message_for_blank_errors(auth_client) -> None:
    request = _FakeRequest(raw_error=ValueError())

    response = asyncio.run(auth_routes.reset_password(request, auth_client=auth_client))

    assert response.status_code == 500
    assert _body(response) == {'error': 'Error during password reset'}


def test_update_password_short_password_never_reaches_collaborator(auth_client) -> None:
    request = _FakeRequest(body={'password': '12345'}, cookies={'sb-access-token': 'token'})

    response = asyncio.run(auth_routes.update_password(request, auth_client=auth_client))

    assert response.status_code == 400
    assert _body(response) == {'error': 'Password must be at least 6 characters'}
    assert len(auth_client.calls) == 0


def test_update_password_requires_session_cookie(auth_client) -> None:
    for password in ('long-enough', '123'):
        response = asyncio.run(
            auth_routes.update_password(_FakeRequest(body={'password': password}), auth_client=auth_client)
        )

        assert response.status_code == 401
        assert _body(response) == {'error': 'Not authenticated'}
    assert auth_client.calls == []


def test_update_password_uses_cookie_token(auth_client) -> None:
    request = _FakeRequest(body={'password': 'new-secret'}, cookies={'sb-access-token': 'token-abc'})

    result = asyncio.run(auth_routes.update_password(request, auth_client=auth_client))

    assert result == {'success': True}
    assert auth_client.calls == [('update_password', 'token-abc', 'new-secret')]


def test_update_password_forwards_collaborator_message(auth_client, collaborator_error) -> None:
    auth_client.error = collaborator_error('New password should be different from the old password.')
    request = _FakeRequest(body={'password': 'new-secret'}, cookies={'sb-access-token': 'token-abc'})

    response = asyncio.run(auth_routes.update_password(request, auth_client=auth_client))

    assert response.status_code == 400
    assert _body(response) == {'error': 'New password should be different from the old password.'}


def test_auth_action_rejects_unknown_action(auth_client, store) -> None:
    response = asyncio.run(
        auth_routes.auth_action(_FakeRequest(body={'action': 'explode'}), auth_client=auth_client, store=store)
    )

    assert response.status_code == 400
    assert _body(response) == {'error': 'Invalid action'}


def test_sign_in_sets_session_cookies(auth_client, store) -> None:
    store.add_user('user-1', 'Student One', UserRole.STUDENT, email='student@example.com')
    request = _FakeRequest(body={'action': 'signin', 'email': 'student@example.com', 'password': 'secret1'})

    response = asyncio.run(auth_routes.auth_action(request, auth_client=auth_client, store=store))

    payload = _body(response)
    assert response.status_code == 200
    assert payload['email_verified'] is True
    assert payload['user']['id'] == 'user-1'
    assert payload['user']['role'] == 'STUDENT'
    assert payload['user']['aud'] == 'authenticated'
    cookies = _set_cookies(response)
    assert any(cookie.startswith('sb-access-token=access-123') for cookie in cookies)
    assert any(cookie.startswith('sb-refresh-token=refresh-456') for cookie in cookies)


def test_sign_in_reports_unconfirmed_email(auth_client, store, collaborator_error) -> None:
    auth_client.error = collaborator_error('Email not confirmed', code='email_not_confirmed')
    request = _FakeRequest(body={'action': 'signin', 'email': 'student@example.com', 'password': 'secret1'})

    response = asyncio.run(auth_routes.auth_action(request, auth_client=auth_client, store=store))

    assert response.status_code == 401
    assert _body(response) == {
        'error': 'Email not confirmed',
        'message': 'Please confirm your email address to login',
        'code': 'email_not_confirmed',
    }


def test_sign_in_forwards_invalid_credentials(auth_client, store, collaborator_error) -> None:
    auth_client.error = collaborator_error('Invalid login credentials')
    request = _FakeRequest(body={'action': 'signin', 'email': 'student@example.com', 'password': 'wrong-pw'})

    response = asyncio.run(auth_routes.auth_action(request, auth_client=auth_client, store=store))

    assert response.status_code == 400
    assert _body(response) == {'error': 'Invalid login credentials'}


def test_sign_in_without_profile_returns_404(auth_client, store) -> None:
    request = _FakeRequest(body={'action': 'signin', 'email': 'student@example.com', 'password': 'secret1'})

    response = asyncio.run(auth_routes.auth_action(request, auth_client=auth_client, store=store))

    assert response.status_code == 404
    assert _body(response) == {'error': 'User profile not found'}


def test_sign_up_creates_profile_and_role_record(auth_client, store) -> None:
    request = _FakeRequest(
        body={
            'action': 'signup',
            'email': 'new@example.com',
            'password': 'secret1',
            'name': 'New Mentor',
            'role': 'MENTOR',
        }
    )

    response = asyncio.run(auth_routes.auth_action(request, auth_client=auth_client, store=store))

    payload = _body(response)
    assert response.status_code == 200
    assert payload['user']['name'] == 'New Mentor'
    assert payload['user']['mentors'][0]['id'] == 'mentor-user-1'
    assert ('create_role_record', UserRole.MENTOR, 'user-1', 'New Mentor') in store.calls
    # No session yet: the address still needs confirming.
    assert _set_cookies(response) == []


def test_sign_up_sets_cookies_when_session_issued(auth_client, store) -> None:
    auth_client.sign_up_result = AuthResult(
        user=AuthUser(id='user-2', email='new@example.com'),
        session=AuthSession(access_token='a-token', refresh_token='r-token'),
    )
    request = _FakeRequest(
        body={'action': 'signup', 'email': 'new@example.com', 'password': 'secret1', 'name': 'Acme', 'role': 'EMPLOYER'}
    )

    response = asyncio.run(auth_routes.auth_action(request, auth_client=auth_client, store=store))

    assert response.status_code == 200
    assert len(_set_cookies(response)) == 2
    assert store.employers[0].company_name == 'Acme'


def test_sign_up_rejects_unknown_role(auth_client, store) -> None:
    request = _FakeRequest(
        body={'action': 'signup', 'email': 'new@example.com', 'password': 'secret1', 'name': 'X', 'role': 'ADMIN'}
    )

    response = asyncio.run(auth_routes.auth_action(request, auth_client=auth_client, store=store))

    assert response.status_code == 400
    assert _body(response) == {'error': 'Invalid role'}
    assert auth_client.calls == []


def test_sign_out_clears_cookies(auth_client, store) -> None:
    request = _FakeRequest(body={'action': 'signout'}, cookies={'sb-access-token': 'token-abc'})

    response = asyncio.run(auth_routes.auth_action(request, auth_client=auth_client, store=store))

    assert response.status_code == 200
    assert _body(response) == {'success': True}
    assert auth_client.calls == [('sign_out', 'token-abc')]
    cookies = _set_cookies(response)
    assert any(cookie.startswith('sb-access-token=') and 'Max-Age=0' in cookie for cookie in cookies)
    assert any(cookie.startswith('sb-refresh-token=') and 'Max-Age=0' in cookie for cookie in cookies)


def test_resend_confirmation_requires_email(auth_client) -> None:
    response = asyncio.run(auth_routes.resend_confirmation(_FakeRequest(body={}), auth_client=auth_client))

    assert response.status_code == 400
    assert _body(response) == {'error': 'Email is required'}


def test_resend_confirmation_reports_collaborator_error_as_500(auth_client, collaborator_error) -> None:
    auth_client.error = collaborator_error('Email rate limit exceeded')

    response = asyncio.run(
        auth_routes.resend_confirmation(_FakeRequest(body={'email': 'new@example.com'}), auth_client=auth_client)
    )

    assert response.status_code == 500
    assert _body(response) == {'error': 'Email rate limit exceeded'}


def test_resend_confirmation_success(auth_client) -> None:
    result = asyncio.run(
        auth_routes.resend_confirmation(_FakeRequest(body={'email': 'new@example.com'}), auth_client=auth_client)
    )

    assert result == {'message': 'Confirmation email sent successfully'}
    assert auth_client.calls == [('resend_signup_confirmation', 'new@example.com')]


def test_slow_auth_service_does_not_stall_other_requests() -> None:
    def slow_recover(request: httpx.Request) -> httpx.Response:
        time.sleep(0.4)
        return httpx.Response(200, json={})

    client = SupabaseAuthClient(
        'https://project.supabase.co',
        'anon-key',
        transport=httpx.MockTransport(slow_recover),
    )
    request = _FakeRequest(body={'email': 'student@example.com'})

    async def scenario():
        ticks: list[float] = []

        async def ticker():
            for _ in range(8):
                ticks.append(time.monotonic())
                await asyncio.sleep(0.05)

        _, result = await asyncio.gather(ticker(), auth_routes.reset_password(request, auth_client=client))
        return ticks, result

    ticks, result = asyncio.run(scenario())

    assert result == {'success': True}
    assert max(later - earlier for earlier, later in zip(ticks, ticks[1:])) < 0.2
