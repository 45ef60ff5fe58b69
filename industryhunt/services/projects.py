"""
Employer projects, student applications to them and the open-project
listings students browse.

Technologies are stored on the project row; creating or updating a
project also registers any technology missing from the skills catalogue.
"""

import logging

from industryhunt.core.errors import CollaboratorError, NotFoundError, ValidationError
from industryhunt.schemas import (
    ApplicationRef,
    AvailableProject,
    MarketplaceProject,
    ProjectApplicant,
    ProjectApplicationRecord,
    ProjectCard,
    ProjectDetail,
    ProjectRecord,
    ProjectSummary,
    StudentProject,
)
from industryhunt.services.people import company_names, person_ref, student_user
from industryhunt.services.store import DataStore

logger = logging.getLogger(__name__)

OPEN = 'OPEN'
IN_PROGRESS = 'IN_PROGRESS'
PENDING = 'PENDING'
ALL_STATUSES = 'all'
TECHNOLOGY_CATEGORY = 'Technology'
NO_UPDATE_FIELDS = 'No valid update fields provided'


def _status_filter(status: str | None) -> str | None:
    return None if not status or status == ALL_STATUSES else status


def _cards(store: DataStore, projects: list[ProjectRecord], card_type=ProjectCard) -> list:
    names = company_names(store, [project.employer_id for project in projects])
    return [
        card_type(
            **project.model_dump(include=set(ProjectCard.model_fields) - {'company_name'}),
            company_name=names[project.employer_id],
        )
        for project in projects
    ]


def register_technologies(store: DataStore, technologies: list[str]) -> None:
    for technology in technologies:
        try:
            if store.get_skill_by_name(technology) is None:
                store.create_skill(technology, TECHNOLOGY_CATEGORY)
        except CollaboratorError:
            logger.exception('Error registering technology %s', technology)


def list_employer_projects(store: DataStore, employer_id: str, status: str | None = None) -> list[ProjectSummary]:
    projects = store.list_projects(employer_id=employer_id, status=_status_filter(status))
    names = company_names(store, [employer_id])
    return [
        ProjectSummary(
            **project.model_dump(),
            company_name=names[employer_id],
            applications_count=len(store.list_project_applications(project_id=project.id)),
        )
        for project in projects
    ]


def get_project_detail(store: DataStore, project_id: str) -> ProjectDetail:
    project = store.get_project(project_id)
    if project is None:
        raise NotFoundError('Project not found')

    applications = store.list_project_applications(project_id=project_id)
    employer = store.get_employer(project.employer_id)
    return ProjectDetail(
        **project.model_dump(),
        company_name=employer.company_name if employer else None,
        applications_count=len(applications),
        applicants=[
            ProjectApplicant(
                id=application.id,
                status=application.status,
                cover_letter=application.cover_letter,
                applied_at=application.applied_at,
                student=person_ref(
                    application.student_id,
                    student_user(store, application.student_id),
                    'Unknown Student',
                ),
            )
            for application in applications
        ],
    )


def create_project(store: DataStore, values: dict) -> ProjectRecord:
    project = store.create_project(
        {
            **values,
            'status': values.get('status') or OPEN,
            'is_paid': bool(values.get('is_paid')),
            'technologies': values.get('technologies') or [],
        }
    )
    register_technologies(store, project.technologies)
    return project


def update_project(store: DataStore, project_id: str, changes: dict) -> ProjectRecord:
    if not changes:
        raise ValidationError(NO_UPDATE_FIELDS)
    project = store.update_project(project_id, changes)
    if project is None:
        raise NotFoundError('Project not found')
    if changes.get('technologies'):
        register_technologies(store, changes['technologies'])
    return project


def delete_project(store: DataStore, project_id: str) -> None:
    store.delete_project(project_id)


def apply_to_project(
    store: DataStore,
    project_id: str,
    student_id: str,
    cover_letter: str | None = None,
) -> ProjectApplicationRecord:
    project = store.get_project(project_id)
    if project is None:
        raise NotFoundError('Project not found')
    if project.status != OPEN:
        raise ValidationError('This project is not open for applications')
    if store.list_project_applications(project_id=project_id, student_id=student_id):
        raise ValidationError('You have already applied for this project')
    return store.create_project_application(
        {'project_id': project_id, 'student_id': student_id, 'cover_letter': cover_letter, 'status': PENDING}
    )


def list_student_projects(store: DataStore, student_id: str, status: str | None = None) -> list[StudentProject]:
    """Projects the student applied to, then assigned ones not already listed."""
    applications = store.list_project_applications(student_id=student_id, status=_status_filter(status))
    applied = []
    for application in applications:
        project = store.get_project(application.project_id)
        if project is None:
            continue
        applied.append((project, application))

    cards = _cards(store, [project for project, _ in applied], StudentProject)
    for card, (_, application) in zip(cards, applied):
        card.application = ApplicationRef(**application.model_dump(include=set(ApplicationRef.model_fields)))

    listed = {card.id for card in cards}
    try:
        assigned = [
            project
            for project in store.list_projects(status=IN_PROGRESS)
            if student_id in project.assigned_students and project.id not in listed
        ]
    except CollaboratorError:
        logger.exception('Error fetching assigned projects for student %s', student_id)
        assigned = []
    for card in _cards(store, assigned, StudentProject):
        card.assigned = True
        cards.append(card)
    return cards


def relevance_score(student_skills: list[str], technologies: list[str]) -> float:
    """Share of the project's technologies the student lists as skills."""
    if not student_skills or not technologies:
        return 0.0
    known = {skill.lower() for skill in student_skills}
    matches = sum(1 for technology in technologies if technology.lower() in known)
    return matches / len(technologies)


def list_available_projects(store: DataStore, student_id: str) -> list[AvailableProject]:
    student = store.get_student(student_id)
    skills = student.skills if student else []

    cards = _cards(store, store.list_projects(status=OPEN), AvailableProject)
    for card in cards:
        card.relevance_score = relevance_score(skills, card.technologies)

    # Two stable sorts: newest first, then highest score first.
    cards.sort(key=lambda card: card.created_at.timestamp() if card.created_at else 0.0, reverse=True)
    cards.sort(key=lambda card: card.relevance_score, reverse=True)
    return cards


def _mentions(project: ProjectCard, text: str) -> bool:
    text = text.lower()
    return text in project.title.lower() or text in (project.description or '').lower()


def _uses(project: ProjectCard, technology: str) -> bool:
    return any(item.lower() == technology.lower() for item in project.technologies)


def list_marketplace(
    store: DataStore,
    search: str | None = None,
    category: str | None = None,
    skill: str | None = None,
    paid: str | None = None,
    student_id: str | None = None,
) -> list[MarketplaceProject]:
    projects = _cards(store, store.list_projects(status=OPEN), MarketplaceProject)

    if search:
        projects = [project for project in projects if _mentions(project, search)]
    if category:
        projects = [project for project in projects if _uses(project, category)]
    if skill:
        projects = [project for project in projects if _uses(project, skill)]
    if paid is not None:
        is_paid = paid == 'true'
        projects = [project for project in projects if project.is_paid is is_paid]

    if student_id:
        try:
            applied = {
                application.project_id
                for application in store.list_project_applications(student_id=student_id)
            }
        except CollaboratorError:
            logger.exception('Error fetching applications for student %s', student_id)
        else:
            for project in projects:
                project.applied = project.id in applied
    return projects
