from fastapi import APIRouter, Depends, Query, Request
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
from industryhunt.routes.job_routes import JobBody, JobChanges, job_created
from industryhunt.services import jobs, projects
from industryhunt.services.store import DataStore

router = APIRouter(tags=['employers'])


class ProjectBody(DeadlineFields):
    employer_id: RequiredText
    title: RequiredText
    description: RequiredText
    is_paid: bool | None = False
    budget: float | None = None
    technologies: list[str] | None = None
    status: str | None = None


class ProjectChanges(DeadlineFields):
    title: RequiredText = None
    description: RequiredText = None
    is_paid: bool = None
    budget: float | None = None
    status: RequiredText = None
    technologies: list[str] = None


@router.get('/jobs')
def employer_jobs(
    employer_id: str | None = Query(None, alias='employerId'),
    status: str | None = Query(None),
    store: DataStore = Depends(get_data_store),
):
    try:
        employer_id = require_param(employer_id, 'employerId')
        listed = jobs.list_jobs(store, employer_id=employer_id, status=status or None)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch jobs')

    return {'jobs': [job.model_dump(mode='json') for job in listed]}


@router.post('/jobs')
async def create_employer_job(request: Request, store: DataStore = Depends(get_data_store)):
    try:
        payload = await read_json_body(request)
        body = parse_body(
            JobBody,
            payload,
            'Missing required fields: employer_id, title, and description are required',
        )
        job = await run_in_threadpool(jobs.create_job, store, body.model_dump())
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to create job')

    return job_created(job)


@router.get('/jobs/{job_id}')
def job_detail(job_id: str, store: DataStore = Depends(get_data_store)):
    try:
        job = jobs.get_job_detail(store, job_id)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch job details')

    return {'job': job.model_dump(mode='json')}


@router.patch('/jobs/{job_id}')
async def update_job(job_id: str, request: Request, store: DataStore = Depends(get_data_store)):
    try:
        payload = await read_json_body(request)
        changes = changes_from(JobChanges, payload, jobs.NO_UPDATE_FIELDS)
        job = await run_in_threadpool(jobs.update_job, store, job_id, changes)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to update job')

    return {'success': True, 'job': job.model_dump(mode='json'), 'message': 'Job updated successfully'}


@router.delete('/jobs/{job_id}')
def delete_job(job_id: str, store: DataStore = Depends(get_data_store)):
    try:
        jobs.delete_job(store, job_id)
    except Exception:
        return server_error('Failed to delete job')

    return {'success': True, 'message': 'Job deleted successfully'}


@router.get('/projects')
def employer_projects(
    employer_id: str | None = Query(None, alias='employerId'),
    status: str | None = Query(None),
    store: DataStore = Depends(get_data_store),
):
    try:
        employer_id = require_param(employer_id, 'employerId')
        listed = projects.list_employer_projects(store, employer_id, status=status)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch employer projects')

    return {'projects': [project.model_dump(mode='json') for project in listed]}


@router.post('/projects')
async def create_project(request: Request, store: DataStore = Depends(get_data_store)):
    try:
        payload = await read_json_body(request)
        body = parse_body(ProjectBody, payload, 'Missing required fields: title, description, employer_id')
        project = await run_in_threadpool(projects.create_project, store, body.model_dump())
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to create project')

    return {
        'success': True,
        'project': project.model_dump(mode='json'),
        'message': 'Project created successfully',
    }


@router.get('/projects/{project_id}')
def project_detail(project_id: str, store: DataStore = Depends(get_data_store)):
    try:
        project = projects.get_project_detail(store, project_id)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch project details')

    return {'project': project.model_dump(mode='json')}


@router.patch('/projects/{project_id}')
async def update_project(project_id: str, request: Request, store: DataStore = Depends(get_data_store)):
    try:
        payload = await read_json_body(request)
        changes = changes_from(ProjectChanges, payload, projects.NO_UPDATE_FIELDS)
        project = await run_in_threadpool(projects.update_project, store, project_id, changes)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to update project')

    return {
        'success': True,
        'project': project.model_dump(mode='json'),
        'message': 'Project updated successfully',
    }


@router.delete('/projects/{project_id}')
def delete_project(project_id: str, store: DataStore = Depends(get_data_store)):
    try:
        projects.delete_project(store, project_id)
    except Exception:
        return server_error('Failed to delete project')

    return {'success': True, 'message': 'Project deleted successfully'}
