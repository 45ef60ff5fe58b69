"""
Mentor expertise, skill lookup and the sessions mentors, students and
employers schedule with each other.
"""

from industryhunt.core.errors import ConflictError, NotFoundError, ValidationError
from industryhunt.models.roles import UserRole
from industryhunt.schemas import (
    EmployerSessionRecord,
    EmployerSessionView,
    Expertise,
    ExpertiseRecord,
    JobRef,
    MentorshipSessionRecord,
    MentorshipSessionView,
    PersonRef,
    SkillRecord,
)
from industryhunt.services.people import mentor_user, person_ref, student_user
from industryhunt.services.store import DataStore

MIN_LEVEL = 1
MAX_LEVEL = 5
PENDING = 'PENDING'
INVALID_LEVEL = 'Invalid level value. Level must be between 1 and 5.'


def check_level(level) -> int:
    if isinstance(level, bool) or not isinstance(level, int) or not MIN_LEVEL <= level <= MAX_LEVEL:
        raise ValidationError(INVALID_LEVEL)
    return level


def _expertise(record: ExpertiseRecord, skill: SkillRecord | None) -> Expertise:
    return Expertise(
        id=record.id,
        name=skill.name if skill else 'Unknown Skill',
        category=(skill.category if skill else None) or 'Uncategorized',
        skill_id=record.skill_id,
        level=record.level,
    )


def list_expertise(store: DataStore, mentor_id: str) -> list[Expertise]:
    return [
        _expertise(record, store.get_skill(record.skill_id))
        for record in store.list_mentor_expertise(mentor_id)
    ]


def add_expertise(store: DataStore, mentor_id: str, skill_id: str, level: int) -> Expertise:
    level = check_level(level)
    if any(record.skill_id == skill_id for record in store.list_mentor_expertise(mentor_id)):
        raise ConflictError('This expertise already exists for the mentor')
    skill = store.get_skill(skill_id)
    if skill is None:
        raise NotFoundError('Skill not found')
    record = store.create_expertise({'mentor_id': mentor_id, 'skill_id': skill_id, 'level': level})
    return _expertise(record, skill)


def update_expertise_level(store: DataStore, expertise_id: str, level) -> Expertise:
    record = store.update_expertise(expertise_id, {'level': check_level(level)})
    if record is None:
        raise NotFoundError('Expertise not found')
    return _expertise(record, store.get_skill(record.skill_id))


def remove_expertise(store: DataStore, expertise_id: str) -> None:
    store.delete_expertise(expertise_id)


def available_skills(store: DataStore, mentor_id: str, query: str = '') -> list[SkillRecord]:
    """Catalogue skills the mentor has not claimed, filtered by name."""
    held = {record.skill_id for record in store.list_mentor_expertise(mentor_id)}
    query = query.lower()
    return [
        skill
        for skill in store.list_skills()
        if skill.id not in held and query in skill.name.lower()
    ]


def list_mentor_students(store: DataStore, mentor_id: str) -> list[PersonRef]:
    """Distinct students the mentor has sessions with, most recent first."""
    if store.get_mentor(mentor_id) is None:
        raise NotFoundError('Mentor not found')

    sessions = sorted(
        store.list_mentorship_sessions(mentor_id=mentor_id),
        key=lambda session: session.created_at.timestamp() if session.created_at else 0.0,
        reverse=True,
    )
    students: dict[str, PersonRef] = {}
    for session in sessions:
        if session.student_id in students:
            continue
        if store.get_student(session.student_id) is None:
            continue
        students[session.student_id] = person_ref(
            session.student_id,
            student_user(store, session.student_id),
            'Unknown Student',
        )
    return list(students.values())


def parse_session_role(value) -> UserRole:
    if not isinstance(value, str):
        raise ValidationError('Invalid user role')
    try:
        return UserRole.parse(value)
    except ValueError as exc:
        raise ValidationError('Invalid user role') from exc


def _role_record_id(store: DataStore, user_id: str, role: UserRole) -> str | None:
    if role is UserRole.STUDENT:
        record = store.get_student_by_user(user_id)
    elif role is UserRole.MENTOR:
        record = store.get_mentor_by_user(user_id)
    else:
        record = store.get_employer_by_user(user_id)
    return record.id if record else None


def _mentorship_view(store: DataStore, session: MentorshipSessionRecord, viewer: UserRole) -> MentorshipSessionView:
    view = MentorshipSessionView(**session.model_dump())
    if viewer is UserRole.STUDENT:
        view.mentor = person_ref(session.mentor_id, mentor_user(store, session.mentor_id), 'Mentor')
    else:
        view.student = person_ref(session.student_id, student_user(store, session.student_id), 'Student')
    return view


def _employer_view(store: DataStore, session: EmployerSessionRecord) -> EmployerSessionView:
    job = store.get_job(session.job_id) if session.job_id else None
    return EmployerSessionView(
        **session.model_dump(),
        applicant=person_ref(session.applicant_id, student_user(store, session.applicant_id), 'Applicant'),
        job=JobRef(id=job.id, title=job.title) if job else None,
        zoom_link=session.meeting_link,
    )


def list_sessions(store: DataStore, user_id: str, role: UserRole) -> list:
    """Sessions of the account ``user_id`` in its ``role``, earliest first."""
    record_id = _role_record_id(store, user_id, role)
    if record_id is None:
        return []
    if role is UserRole.STUDENT:
        sessions = store.list_mentorship_sessions(student_id=record_id)
    elif role is UserRole.MENTOR:
        sessions = store.list_mentorship_sessions(mentor_id=record_id)
    else:
        return [_employer_view(store, session) for session in store.list_employer_sessions(record_id)]
    return [_mentorship_view(store, session, role) for session in sessions]


def create_session(store: DataStore, role: UserRole, values: dict):
    values = {**values, 'status': values.get('status') or PENDING, 'description': values.get('description') or ''}
    if role is UserRole.EMPLOYER:
        values['meeting_link'] = values.get('meeting_link') or ''
        return _employer_view(store, store.create_employer_session(values))
    values['zoom_link'] = values.get('zoom_link') or ''
    return _mentorship_view(store, store.create_mentorship_session(values), UserRole.STUDENT)


def update_session(store: DataStore, role: UserRole, session_id: str, changes: dict):
    if not changes:
        raise ValidationError('No valid update fields provided')
    if role is UserRole.EMPLOYER:
        session = store.update_employer_session(session_id, changes)
        view = _employer_view(store, session) if session else None
    else:
        session = store.update_mentorship_session(session_id, changes)
        view = _mentorship_view(store, session, role) if session else None
    if view is None:
        raise NotFoundError('Session not found')
    return view


def delete_session(store: DataStore, role: UserRole, session_id: str) -> None:
    if role is UserRole.EMPLOYER:
        store.delete_employer_session(session_id)
    else:
        store.delete_mentorship_session(session_id)
