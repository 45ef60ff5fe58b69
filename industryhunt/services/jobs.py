"""
Job postings and the applications students send to them.
"""

from industryhunt.core.errors import NotFoundError, ValidationError
from industryhunt.schemas import (
    ApplicationJob,
    JobApplicant,
    JobApplicationRecord,
    JobApplicationView,
    JobDetail,
    JobRecord,
    JobSummary,
)
from industryhunt.services.people import company_names, student_user
from industryhunt.services.store import DataStore

DEFAULT_JOB_STATUS = 'ACTIVE'
PENDING = 'PENDING'
NO_UPDATE_FIELDS = 'No valid update fields provided'


def summarize_jobs(store: DataStore, jobs: list[JobRecord]) -> list[JobSummary]:
    names = company_names(store, [job.employer_id for job in jobs])
    return [
        JobSummary(
            **job.model_dump(),
            company_name=names[job.employer_id],
            applications_count=len(store.list_job_applications(job_id=job.id)),
        )
        for job in jobs
    ]


def list_jobs(store: DataStore, employer_id: str | None = None, status: str | None = None) -> list[JobSummary]:
    return summarize_jobs(store, store.list_jobs(employer_id=employer_id, status=status))


def _applicant(store: DataStore, application: JobApplicationRecord) -> JobApplicant:
    user = student_user(store, application.student_id)
    return JobApplicant(
        id=application.id,
        status=application.status,
        created_at=application.created_at,
        cover_letter=application.cover_letter,
        student_id=application.student_id,
        student_name=user.name if user else None,
        student_email=user.email if user else None,
        student_avatar=user.avatar_url if user else None,
    )


def get_job_detail(store: DataStore, job_id: str) -> JobDetail:
    job = store.get_job(job_id)
    if job is None:
        raise NotFoundError('Job not found')

    applications = store.list_job_applications(job_id=job_id)
    employer = store.get_employer(job.employer_id)
    return JobDetail(
        **job.model_dump(),
        company_name=employer.company_name if employer else None,
        applications_count=len(applications),
        applications=[_applicant(store, application) for application in applications],
    )


def create_job(store: DataStore, values: dict) -> JobRecord:
    return store.create_job({**values, 'status': values.get('status') or DEFAULT_JOB_STATUS})


def update_job(store: DataStore, job_id: str, changes: dict) -> JobRecord:
    if not changes:
        raise ValidationError(NO_UPDATE_FIELDS)
    job = store.update_job(job_id, changes)
    if job is None:
        raise NotFoundError('Job not found')
    return job


def delete_job(store: DataStore, job_id: str) -> None:
    store.delete_job(job_id)


def _application_view(store: DataStore, application: JobApplicationRecord) -> JobApplicationView:
    job = store.get_job(application.job_id)
    if job is None:
        summary = ApplicationJob()
    else:
        employer = store.get_employer(job.employer_id)
        summary = ApplicationJob(
            **job.model_dump(include=set(ApplicationJob.model_fields) - {'company_name'}),
            company_name=employer.company_name if employer else None,
        )
    return JobApplicationView(
        id=application.id,
        status=application.status,
        cover_letter=application.cover_letter,
        created_at=application.created_at,
        updated_at=application.updated_at,
        student_id=application.student_id,
        job=summary,
    )


def list_student_applications(
    store: DataStore,
    student_id: str,
    status: str | None = None,
) -> list[JobApplicationView]:
    applications = store.list_job_applications(student_id=student_id, status=status)
    return [_application_view(store, application) for application in applications]


def get_application(store: DataStore, application_id: str) -> JobApplicationView:
    application = store.get_job_application(application_id)
    if application is None:
        raise NotFoundError('Application not found')
    return _application_view(store, application)


def apply_to_job(
    store: DataStore,
    job_id: str,
    student_id: str,
    cover_letter: str | None = None,
) -> JobApplicationRecord:
    if store.get_job(job_id) is None:
        raise NotFoundError('Job not found')
    if store.list_job_applications(job_id=job_id, student_id=student_id):
        raise ValidationError('You have already applied for this job')
    return store.create_job_application(
        {'job_id': job_id, 'student_id': student_id, 'cover_letter': cover_letter, 'status': PENDING}
    )


def update_application(store: DataStore, application_id: str, changes: dict) -> JobApplicationRecord:
    if not changes:
        raise ValidationError(NO_UPDATE_FIELDS)
    application = store.update_job_application(application_id, changes)
    if application is None:
        raise NotFoundError('Application not found')
    return application


def withdraw_application(store: DataStore, application_id: str) -> None:
    store.delete_job_application(application_id)
