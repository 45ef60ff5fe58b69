import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from industryhunt.core import config
from industryhunt.core.errors import (
    ApiError,
    CollaboratorError,
    NotAuthenticatedError,
    UnexpectedError,
    ValidationError,
    error_response,
    unexpected_error_response,
)
from industryhunt.dependencies import get_auth_client, get_data_store
from industryhunt.models.roles import UserRole
from industryhunt.routes.helpers import read_json_body, require_string
from industryhunt.schemas import AuthSession, merge_profile
from industryhunt.services.auth_client import AuthClient
from industryhunt.services.store import DataStore

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
RESET_PASSWORD_PATH = '/auth/reset-password'
EMAIL_NOT_CONFIRMED = 'Email not confirmed'


def build_redirect_url(request: Request, path: str) -> str:
    return f"{str(request.base_url).rstrip('/')}{path}"


def set_session_cookies(response: JSONResponse, session: AuthSession) -> None:
    response.set_cookie(
        config.ACCESS_TOKEN_COOKIE,
        session.access_token,
        max_age=config.ACCESS_TOKEN_MAX_AGE,
        path='/',
    )
    response.set_cookie(
        config.REFRESH_TOKEN_COOKIE,
        session.refresh_token,
        max_age=config.REFRESH_TOKEN_MAX_AGE,
        path='/',
    )


def clear_session_cookies(response: JSONResponse) -> None:
    response.delete_cookie(config.ACCESS_TOKEN_COOKIE, path='/')
    response.delete_cookie(config.REFRESH_TOKEN_COOKIE, path='/')


def handle_sign_up(payload: dict, request: Request, auth_client: AuthClient, store: DataStore) -> JSONResponse:
    email = require_string(payload, 'email', 'Email is required')
    password = require_string(payload, 'password', 'Password is required')
    name = payload.get('name') or ''
    try:
        role = UserRole.parse(payload.get('role'))
    except ValueError as exc:
        raise ValidationError('Invalid role') from exc

    result = auth_client.sign_up(email, password)
    if result.user is None:
        raise UnexpectedError('Failed to create user account')

    try:
        store.create_user(result.user.id, name, email, role)
    except CollaboratorError as exc:
        logger.error('Error creating profile for %s: %s', result.user.id, exc.message)
        raise UnexpectedError(exc.message or 'Failed to create user profile') from exc

    try:
        store.create_role_record(role, result.user.id, name)
    except CollaboratorError as exc:
        logger.error('Error creating %s profile: %s', role.value.lower(), exc.message)

    try:
        profile = store.get_profile(result.user.id)
    except CollaboratorError as exc:
        logger.error('Error fetching complete profile: %s', exc.message)
        profile = None

    if profile is not None:
        user_data = merge_profile(profile, result.user)
    else:
        user_data = result.user.model_dump(mode='json')

    response = JSONResponse(content={'user': user_data})
    if result.session is not None:
        set_session_cookies(response, result.session)
    return response


def handle_sign_in(payload: dict, request: Request, auth_client: AuthClient, store: DataStore) -> JSONResponse:
    email = require_string(payload, 'email', 'Email is required')
    password = require_string(payload, 'password', 'Password is required')

    try:
        result = auth_client.sign_in_with_password(email, password)
    except CollaboratorError as exc:
        if EMAIL_NOT_CONFIRMED not in exc.message:
            raise
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={
                'error': EMAIL_NOT_CONFIRMED,
                'message': 'Please confirm your email address to login',
                'code': 'email_not_confirmed',
            },
        )

    if result.user is None or result.session is None:
        raise UnexpectedError('Failed to sign in')

    try:
        profile = store.get_profile(result.user.id)
    except CollaboratorError as exc:
        logger.error('Error getting user profile: %s', exc.message)
        profile = None
    if profile is None:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={'error': 'User profile not found'})

    email_verified = result.user.email_confirmed_at is not None
    response = JSONResponse(
        content={
            'user': merge_profile(profile, result.user, email_verified=email_verified),
            'email_verified': email_verified,
        }
    )
    set_session_cookies(response, result.session)
    return response


def handle_sign_out(payload: dict, request: Request, auth_client: AuthClient, store: DataStore) -> JSONResponse:
    try:
        auth_client.sign_out(request.cookies.get(config.ACCESS_TOKEN_COOKIE))
    except CollaboratorError as exc:
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={'error': exc.message})

    response = JSONResponse(content={'success': True})
    clear_session_cookies(response)
    return response


AUTH_ACTIONS = {
    'signup': handle_sign_up,
    'signin': handle_sign_in,
    'signout': handle_sign_out,
}


@router.post('')
async def auth_action(
    request: Request,
    auth_client: AuthClient = Depends(get_auth_client),
    store: DataStore = Depends(get_data_store),
):
    try:
        payload = await read_json_body(request)
        handler = AUTH_ACTIONS.get(payload.get('action'))
        if handler is None:
            raise ValidationError('Invalid action')
        return await run_in_threadpool(handler, payload, request, auth_client, store)
    except ApiError as exc:
        return error_response(exc)
    except Exception as exc:
        return unexpected_error_response(exc, 'Authentication error')


@router.post('/reset-password')
async def reset_password(request: Request, auth_client: AuthClient = Depends(get_auth_client)):
    try:
        payload = await read_json_body(request)
        email = require_string(payload, 'email', 'Email is required')
        await run_in_threadpool(
            auth_client.reset_password_for_email,
            email,
            redirect_to=build_redirect_url(request, RESET_PASSWORD_PATH),
        )
    except ApiError as exc:
        return error_response(exc)
    except Exception as exc:
        return unexpected_error_response(exc, 'Error during password reset')

    return {'success': True}


@router.post('/update-password')
async def update_password(request: Request, auth_client: AuthClient = Depends(get_auth_client)):
    try:
        # The session check runs first: without a cookie the answer is 401
        # whatever the body holds.
        access_token = request.cookies.get(config.ACCESS_TOKEN_COOKIE)
        if not access_token:
            raise NotAuthenticatedError('Not authenticated')

        payload = await read_json_body(request)
        password = payload.get('password')
        if not password or not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')

        await run_in_threadpool(auth_client.update_password, access_token, password)
    except ApiError as exc:
        return error_response(exc)
    except Exception as exc:
        return unexpected_error_response(exc, 'Error updating password')

    return {'success': True}


@router.post('/resend-confirmation')
async def resend_confirmation(request: Request, auth_client: AuthClient = Depends(get_auth_client)):
    try:
        payload = await read_json_body(request)
        email = require_string(payload, 'email', 'Email is required')
        await run_in_threadpool(auth_client.resend_signup_confirmation, email)
    except ValidationError as exc:
        return error_response(exc)
    except CollaboratorError as exc:
        logger.error('Error resending confirmation email: %s', exc.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={'error': exc.message or 'Failed to resend confirmation email'},
        )
    except Exception as exc:
        return unexpected_error_response(exc, 'Server error')

    return {'message': 'Confirmation email sent successfully'}
