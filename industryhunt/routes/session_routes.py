import datetime as dt

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from industryhunt.core.errors import ValidationError, error_response
from industryhunt.dependencies import get_data_store
from industryhunt.models.roles import UserRole
from industryhunt.routes.helpers import RequiredText, changes_from, parse_body, read_json_body, server_error
from industryhunt.services import mentorship
from industryhunt.services.store import DataStore

router = APIRouter(tags=['sessions'])

INVALID_SESSION_FIELDS = 'Invalid session fields'


class MentorshipSessionBody(BaseModel):
    mentor_id: RequiredText
    student_id: RequiredText
    title: RequiredText
    date: dt.date
    time: dt.time
    description: str | None = None
    status: str | None = None
    zoom_link: str | None = None


class EmployerSessionBody(BaseModel):
    employer_id: RequiredText
    applicant_id: RequiredText
    title: RequiredText
    date: dt.date
    time: dt.time
    job_id: str | None = None
    description: str | None = None
    status: str | None = None
    meeting_link: str | None = None


class MentorshipSessionChanges(BaseModel):
    title: RequiredText = None
    description: str | None = None
    date: dt.date = None
    time: dt.time = None
    status: RequiredText = None
    zoom_link: str | None = None


class EmployerSessionChanges(BaseModel):
    title: RequiredText = None
    description: str | None = None
    date: dt.date = None
    time: dt.time = None
    status: RequiredText = None
    meeting_link: str | None = None


def _dump(session) -> dict:
    return session.model_dump(mode='json', exclude_none=True)


@router.get('')
def list_sessions(
    user_id: str | None = Query(None, alias='userId'),
    user_role: str | None = Query(None, alias='userRole'),
    store: DataStore = Depends(get_data_store),
):
    try:
        if not user_id or not user_role:
            raise ValidationError('Missing userId or userRole parameter')
        role = mentorship.parse_session_role(user_role)
        sessions = mentorship.list_sessions(store, user_id, role)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch sessions')

    return {'sessions': [_dump(session) for session in sessions]}


@router.post('')
async def create_session(request: Request, store: DataStore = Depends(get_data_store)):
    try:
        payload = await read_json_body(request)
        session_data = payload.get('sessionData')
        if not payload.get('userRole') or not isinstance(session_data, dict):
            raise ValidationError('Missing userRole or sessionData')
        role = mentorship.parse_session_role(payload['userRole'])
        if role is UserRole.EMPLOYER:
            body = parse_body(EmployerSessionBody, session_data, 'Missing required fields for employer session')
        else:
            body = parse_body(
                MentorshipSessionBody,
                session_data,
                'Missing required fields for mentorship session',
            )
        session = await run_in_threadpool(mentorship.create_session, store, role, body.model_dump())
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to create session')

    return {'session': _dump(session)}


@router.put('')
async def update_session(request: Request, store: DataStore = Depends(get_data_store)):
    try:
        payload = await read_json_body(request)
        session_id = payload.get('sessionId')
        session_data = payload.get('sessionData')
        if not payload.get('userRole') or not session_id or not isinstance(session_data, dict):
            raise ValidationError('Missing userRole, sessionId, or sessionData')
        role = mentorship.parse_session_role(payload['userRole'])
        changes_model = EmployerSessionChanges if role is UserRole.EMPLOYER else MentorshipSessionChanges
        changes = changes_from(changes_model, session_data, INVALID_SESSION_FIELDS)
        session = await run_in_threadpool(mentorship.update_session, store, role, session_id, changes)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to update session')

    return {'session': _dump(session)}


@router.delete('')
def delete_session(
    session_id: str | None = Query(None, alias='sessionId'),
    user_role: str | None = Query(None, alias='userRole'),
    store: DataStore = Depends(get_data_store),
):
    try:
        if not session_id or not user_role:
            raise ValidationError('Missing sessionId or userRole parameter')
        role = mentorship.parse_session_role(user_role)
        mentorship.delete_session(store, role, session_id)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to delete session')

    return {'success': True}
