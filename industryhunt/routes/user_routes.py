import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from industryhunt.core import config
from industryhunt.core.errors import (
    CollaboratorError,
    NotAuthenticatedError,
    error_response,
    unexpected_error_response,
)
from industryhunt.dependencies import get_auth_client, get_data_store
from industryhunt.models.roles import UserRole
from industryhunt.schemas import merge_profile
from industryhunt.services.auth_client import AuthClient
from industryhunt.services.directory import list_directory
from industryhunt.services.store import DataStore

router = APIRouter(tags=['users'])

logger = logging.getLogger(__name__)


def directory_response(store: DataStore, role: UserRole, key: str):
    try:
        entries = list_directory(store, role)
    except Exception:
        logger.exception('Error fetching %s', key)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={'error': f'Failed to fetch {key}'},
        )
    return {key: [entry.model_dump() for entry in entries]}


@router.get('/users/applicants')
def list_applicants(store: DataStore = Depends(get_data_store)):
    # Every student is a potential applicant.
    return directory_response(store, UserRole.STUDENT, 'applicants')


@router.get('/users/mentors')
def list_mentors(store: DataStore = Depends(get_data_store)):
    return directory_response(store, UserRole.MENTOR, 'mentors')


@router.get('/users/students')
def list_students(store: DataStore = Depends(get_data_store)):
    return directory_response(store, UserRole.STUDENT, 'students')


@router.get('/user')
def current_user(
    request: Request,
    auth_client: AuthClient = Depends(get_auth_client),
    store: DataStore = Depends(get_data_store),
):
    access_token = request.cookies.get(config.ACCESS_TOKEN_COOKIE)
    refresh_token = request.cookies.get(config.REFRESH_TOKEN_COOKIE)
    if not access_token or not refresh_token:
        return error_response(NotAuthenticatedError('Not authenticated'))

    try:
        try:
            auth_user = auth_client.get_user(access_token)
        except CollaboratorError:
            return error_response(NotAuthenticatedError('Invalid session'))

        try:
            profile = store.get_profile(auth_user.id)
        except CollaboratorError as exc:
            logger.error('Error fetching profile for %s: %s', auth_user.id, exc.message)
            profile = None
        if profile is None:
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={'error': 'User profile not found'})

        return {'user': merge_profile(profile, auth_user)}
    except Exception as exc:
        return unexpected_error_response(exc, 'Error fetching user')
