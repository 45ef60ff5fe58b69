from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from industryhunt.core.errors import ValidationError, error_response
from industryhunt.dependencies import get_data_store
from industryhunt.routes.helpers import (
    DeadlineFields,
    RequiredText,
    changes_from,
    parse_body,
    read_json_body,
    require_param,
    server_error,
)
from industryhunt.services import jobs
from industryhunt.services.store import DataStore

router = APIRouter(tags=['jobs'])


class JobBody(DeadlineFields):
    employer_id: RequiredText
    title: RequiredText
    description: RequiredText
    requirements: str | None = None
    location: str | None = None
    salary_range: str | None = None
    status: str | None = None


class JobChanges(DeadlineFields):
    title: RequiredText = None
    description: RequiredText = None
    requirements: str | None = None
    location: str | None = None
    salary_range: str | None = None
    status: RequiredText = None


class ApplicationBody(BaseModel):
    job_id: RequiredText
    student_id: RequiredText
    cover_letter: str | None = None


class ApplicationChanges(BaseModel):
    cover_letter: str | None = None
    status: RequiredText = None


def job_created(job) -> dict:
    return {'success': True, 'job': job.model_dump(mode='json'), 'message': 'Job created successfully'}


@router.get('')
def list_jobs(
    employer_id: str | None = Query(None, alias='employerId'),
    status: str | None = Query(None),
    store: DataStore = Depends(get_data_store),
):
    try:
        listed = jobs.list_jobs(store, employer_id=employer_id or None, status=status or None)
    except Exception:
        return server_error('Failed to fetch jobs')

    return {'jobs': [job.model_dump(mode='json') for job in listed]}


@router.post('')
async def create_job(request: Request, store: DataStore = Depends(get_data_store)):
    try:
        payload = await read_json_body(request)
        body = parse_body(JobBody, payload, 'Missing required fields')
        job = await run_in_threadpool(jobs.create_job, store, body.model_dump())
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to create job')

    return job_created(job)


@router.get('/applications')
def list_applications(
    student_id: str | None = Query(None, alias='studentId'),
    status: str | None = Query(None),
    store: DataStore = Depends(get_data_store),
):
    try:
        student_id = require_param(student_id, 'studentId')
        applications = jobs.list_student_applications(store, student_id, status=status or None)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch job applications')

    return {'applications': [application.model_dump(mode='json') for application in applications]}


@router.post('/applications')
async def apply_to_job(request: Request, store: DataStore = Depends(get_data_store)):
    try:
        payload = await read_json_body(request)
        body = parse_body(
            ApplicationBody,
            payload,
            'Missing required fields: job_id and student_id are required',
        )
        application = await run_in_threadpool(
            jobs.apply_to_job, store, body.job_id, body.student_id, body.cover_letter
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


@router.get('/applications/{application_id}')
def get_application(application_id: str, store: DataStore = Depends(get_data_store)):
    try:
        application = jobs.get_application(store, application_id)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch application details')

    return {'application': application.model_dump(mode='json')}


@router.patch('/applications/{application_id}')
async def update_application(application_id: str, request: Request, store: DataStore = Depends(get_data_store)):
    try:
        payload = await read_json_body(request)
        changes = changes_from(ApplicationChanges, payload, jobs.NO_UPDATE_FIELDS)
        application = await run_in_threadpool(jobs.update_application, store, application_id, changes)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to update application')

    return {
        'success': True,
        'application': application.model_dump(mode='json'),
        'message': 'Application updated successfully',
    }


@router.delete('/applications/{application_id}')
def withdraw_application(application_id: str, store: DataStore = Depends(get_data_store)):
    try:
        jobs.withdraw_application(store, application_id)
    except Exception:
        return server_error('Failed to withdraw application')

    return {'success': True, 'message': 'Application withdrawn successfully'}
