from datetime import date, datetime, time, timedelta, timezone

import pytest

from industryhunt.core.errors import ConflictError, NotFoundError, ValidationError
from industryhunt.models.roles import UserRole
from industryhunt.services import mentorship


def _session(store, student_id='s-1', day=date(2030, 3, 1), **values):
    return store.create_mentorship_session(
        {
            'mentor_id': 'm-1',
            'student_id': student_id,
            'title': 'Career chat',
            'date': day,
            'time': time(10, 30),
            **values,
        }
    )


def test_add_expertise_returns_skill_details(platform_store) -> None:
    expertise = mentorship.add_expertise(platform_store, 'm-1', 'sk-python', 4)

    assert expertise.model_dump(exclude={'id'}) == {
        'name': 'Python',
        'category': 'Language',
        'skill_id': 'sk-python',
        'level': 4,
    }


def test_duplicate_expertise_is_a_conflict(platform_store) -> None:
    mentorship.add_expertise(platform_store, 'm-1', 'sk-python', 4)

    with pytest.raises(ConflictError) as exception_info:
        mentorship.add_expertise(platform_store, 'm-1', 'sk-python', 2)

    assert exception_info.value.message == 'This expertise already exists for the mentor'


def test_expertise_for_unknown_skill_is_not_found(platform_store) -> None:
    with pytest.raises(NotFoundError):
        mentorship.add_expertise(platform_store, 'm-1', 'sk-missing', 3)


@pytest.mark.parametrize('level', [0, 6, None, '3', True, 2.5])
def test_level_outside_one_to_five_is_rejected(platform_store, level) -> None:
    expertise = mentorship.add_expertise(platform_store, 'm-1', 'sk-react', 3)

    with pytest.raises(ValidationError) as exception_info:
        mentorship.update_expertise_level(platform_store, expertise.id, level)

    assert exception_info.value.message == 'Invalid level value. Level must be between 1 and 5.'


def test_update_expertise_level(platform_store) -> None:
    expertise = mentorship.add_expertise(platform_store, 'm-1', 'sk-react', 3)

    updated = mentorship.update_expertise_level(platform_store, expertise.id, 5)

    assert (updated.id, updated.name, updated.level) == (expertise.id, 'React', 5)


def test_update_unknown_expertise_is_not_found(platform_store) -> None:
    with pytest.raises(NotFoundError):
        mentorship.update_expertise_level(platform_store, 'missing', 2)


def test_list_expertise_defaults_missing_category(platform_store) -> None:
    mentorship.add_expertise(platform_store, 'm-1', 'sk-docker', 2)

    [expertise] = mentorship.list_expertise(platform_store, 'm-1')

    assert expertise.category == 'Uncategorized'


def test_list_expertise_tolerates_deleted_skill(platform_store) -> None:
    platform_store.create_expertise({'mentor_id': 'm-1', 'skill_id': 'sk-gone', 'level': 1})

    [expertise] = mentorship.list_expertise(platform_store, 'm-1')

    assert (expertise.name, expertise.category) == ('Unknown Skill', 'Uncategorized')


def test_available_skills_exclude_held_and_filter_by_name(platform_store) -> None:
    mentorship.add_expertise(platform_store, 'm-1', 'sk-python', 4)

    assert [skill.name for skill in mentorship.available_skills(platform_store, 'm-1')] == ['Docker', 'React']
    assert [skill.name for skill in mentorship.available_skills(platform_store, 'm-1', 'RE')] == ['React']


def test_mentor_students_are_unique_and_most_recent_first(platform_store) -> None:
    now = datetime(2030, 1, 1, tzinfo=timezone.utc)
    _session(platform_store, 's-1', created_at=now - timedelta(days=2))
    _session(platform_store, 's-2', created_at=now - timedelta(days=1))
    _session(platform_store, 's-1', created_at=now)

    students = mentorship.list_mentor_students(platform_store, 'm-1')

    assert [student.model_dump() for student in students] == [
        {'id': 's-1', 'name': 'Stu Dent', 'avatar_url': None},
        {'id': 's-2', 'name': 'Ada', 'avatar_url': '/ada.png'},
    ]


def test_students_of_unknown_mentor_is_not_found(platform_store) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        mentorship.list_mentor_students(platform_store, 'm-missing')

    assert exception_info.value.message == 'Mentor not found'


def test_student_sessions_resolve_account_and_show_mentor(platform_store) -> None:
    _session(platform_store, day=date(2030, 3, 2), title='Second')
    _session(platform_store, day=date(2030, 3, 1), title='First')

    sessions = mentorship.list_sessions(platform_store, 'u-student', UserRole.STUDENT)

    assert [session.title for session in sessions] == ['First', 'Second']
    assert sessions[0].mentor.name == 'Men Tor'
    assert sessions[0].student is None


def test_mentor_sessions_show_student(platform_store) -> None:
    _session(platform_store, 's-2')

    [session] = mentorship.list_sessions(platform_store, 'u-mentor', UserRole.MENTOR)

    assert session.student.model_dump() == {'id': 's-2', 'name': 'Ada', 'avatar_url': '/ada.png'}
    assert session.mentor is None


def test_sessions_for_account_without_role_record_are_empty(platform_store) -> None:
    assert mentorship.list_sessions(platform_store, 'u-nobody', UserRole.MENTOR) == []


def test_employer_sessions_include_applicant_job_and_link(platform_store) -> None:
    job = platform_store.create_job({'employer_id': 'e-1', 'title': 'Intern', 'description': 'Help'})
    mentorship.create_session(
        platform_store,
        UserRole.EMPLOYER,
        {
            'employer_id': 'e-1',
            'applicant_id': 's-2',
            'job_id': job.id,
            'title': 'Interview',
            'date': date(2030, 4, 1),
            'time': time(9, 0),
            'meeting_link': 'https://meet.example/abc',
        },
    )

    [session] = mentorship.list_sessions(platform_store, 'u-employer', UserRole.EMPLOYER)

    assert session.applicant.name == 'Ada'
    assert session.job.model_dump() == {'id': job.id, 'title': 'Intern'}
    assert session.zoom_link == 'https://meet.example/abc'
    assert session.status == 'PENDING'


def test_create_mentorship_session_defaults(platform_store) -> None:
    session = mentorship.create_session(
        platform_store,
        UserRole.STUDENT,
        {'mentor_id': 'm-1', 'student_id': 's-1', 'title': 'Chat', 'date': date(2030, 1, 2), 'time': time(8, 0)},
    )

    assert (session.status, session.zoom_link, session.description) == ('PENDING', '', '')
    assert session.mentor.name == 'Men Tor'


def test_update_missing_session_is_not_found(platform_store) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        mentorship.update_session(platform_store, UserRole.MENTOR, 'missing', {'status': 'CONFIRMED'})

    assert exception_info.value.message == 'Session not found'


def test_delete_session_uses_role_table(platform_store) -> None:
    session = _session(platform_store)

    mentorship.delete_session(platform_store, UserRole.EMPLOYER, session.id)
    assert len(platform_store.list_mentorship_sessions(mentor_id='m-1')) == 1

    mentorship.delete_session(platform_store, UserRole.MENTOR, session.id)
    assert platform_store.list_mentorship_sessions(mentor_id='m-1') == []


@pytest.mark.parametrize('value', ['ADMIN', '', None, 3])
def test_parse_session_role_rejects_unknown_roles(value) -> None:
    with pytest.raises(ValidationError) as exception_info:
        mentorship.parse_session_role(value)

    assert exception_info.value.message == 'Invalid user role'
