from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from industryhunt.core.errors import ValidationError, error_response
from industryhunt.dependencies import get_data_store
from industryhunt.routes.helpers import RequiredText, parse_body, read_json_body, require_param, server_error
from industryhunt.services import mentorship
from industryhunt.services.store import DataStore

router = APIRouter(tags=['mentors'])


class ExpertiseBody(BaseModel):
    mentor_id: RequiredText
    skill_id: RequiredText
    level: int


@router.get('/expertise')
def mentor_expertise(
    mentor_id: str | None = Query(None, alias='mentorId'),
    store: DataStore = Depends(get_data_store),
):
    try:
        mentor_id = require_param(mentor_id, 'mentorId')
        expertise = mentorship.list_expertise(store, mentor_id)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch expertise')

    return {'expertise': [item.model_dump() for item in expertise]}


@router.post('/expertise')
async def add_expertise(request: Request, store: DataStore = Depends(get_data_store)):
    try:
        payload = await read_json_body(request)
        body = parse_body(
            ExpertiseBody,
            payload,
            'Missing required fields: mentor_id, skill_id, and level are required',
        )
        expertise = await run_in_threadpool(
            mentorship.add_expertise, store, body.mentor_id, body.skill_id, body.level
        )
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to add expertise')

    return {'success': True, 'expertise': expertise.model_dump(), 'message': 'Expertise added successfully'}


@router.patch('/expertise/{expertise_id}')
async def update_expertise(expertise_id: str, request: Request, store: DataStore = Depends(get_data_store)):
    try:
        payload = await read_json_body(request)
        expertise = await run_in_threadpool(
            mentorship.update_expertise_level, store, expertise_id, payload.get('level')
        )
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to update expertise')

    return {'success': True, 'expertise': expertise.model_dump(), 'message': 'Expertise updated successfully'}


@router.delete('/expertise/{expertise_id}')
def delete_expertise(expertise_id: str, store: DataStore = Depends(get_data_store)):
    try:
        mentorship.remove_expertise(store, expertise_id)
    except Exception:
        return server_error('Failed to delete expertise')

    return {'success': True, 'message': 'Expertise deleted successfully'}


@router.get('/skills')
def available_skills(
    mentor_id: str | None = Query(None, alias='mentorId'),
    query: str = Query(''),
    store: DataStore = Depends(get_data_store),
):
    try:
        mentor_id = require_param(mentor_id, 'mentorId')
        skills = mentorship.available_skills(store, mentor_id, query)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch available skills')

    return {'skills': [skill.model_dump() for skill in skills]}


@router.get('/{mentor_id}/students')
def mentor_students(mentor_id: str, store: DataStore = Depends(get_data_store)):
    try:
        students = mentorship.list_mentor_students(store, mentor_id)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch student relationships')

    return {'students': [student.model_dump() for student in students]}
