from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from industryhunt.core.errors import ValidationError, error_response
from industryhunt.dependencies import get_data_store
from industryhunt.routes.helpers import RequiredText, parse_body, read_json_body, require_param, server_error
from industryhunt.services import projects
from industryhunt.services.store import DataStore

router = APIRouter(tags=['students'])


class ProjectApplicationBody(BaseModel):
    project_id: RequiredText
    student_id: RequiredText
    cover_letter: str | None = None


@router.get('/projects')
def student_projects(
    student_id: str | None = Query(None, alias='studentId'),
    status: str | None = Query(None),
    store: DataStore = Depends(get_data_store),
):
    try:
        student_id = require_param(student_id, 'studentId')
        listed = projects.list_student_projects(store, student_id, status=status)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch student applications')

    return {'projects': [project.model_dump(mode='json') for project in listed]}


@router.post('/projects/apply')
async def apply_to_project(request: Request, store: DataStore = Depends(get_data_store)):
    try:
        payload = await read_json_body(request)
        body = parse_body(ProjectApplicationBody, payload, 'Missing required fields: project_id, student_id')
        application = await run_in_threadpool(
            projects.apply_to_project, store, body.project_id, body.student_id, body.cover_letter
        )
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to submit application')

    return {
        'success': True,
        'application': application.model_dump(mode='json'),
        'message': 'Application submitted successfully',
    }


@router.get('/available-projects')
def available_projects(
    student_id: str | None = Query(None, alias='studentId'),
    store: DataStore = Depends(get_data_store),
):
    try:
        student_id = require_param(student_id, 'studentId')
        listed = projects.list_available_projects(store, student_id)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch projects')

    return {'projects': [project.model_dump(mode='json') for project in listed]}
