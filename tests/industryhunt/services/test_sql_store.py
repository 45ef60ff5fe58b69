import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from industryhunt.core.errors import CollaboratorError
from industryhunt.database import Base
from industryhunt.models.employer import Employer
from industryhunt.models.mentor import Mentor
from industryhunt.models.roles import UserRole
from industryhunt.models.student import Student
from industryhunt.models.user import User
from industryhunt.services.sql_store import SqlDataStore

TABLES = [User.__table__, Student.__table__, Mentor.__table__, Employer.__table__]


@pytest.fixture
def session_factory():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=TABLES)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        Base.metadata.drop_all(bind=engine, tables=list(reversed(TABLES)))
        engine.dispose()


@pytest.fixture
def sql_store(session_factory) -> SqlDataStore:
    db = session_factory()
    try:
        db.add_all(
            [
                User(id='u-student', name='Stu Dent', email='stu@example.com', role='STUDENT'),
                User(id='u-lonely', name='No Record', email='lonely@example.com', role='STUDENT'),
                User(id='u-mentor', name='Men Tor', email='mentor@example.com', role='MENTOR'),
                User(id='u-employer', name='Acme', email='hr@acme.test', role='EMPLOYER'),
            ]
        )
        db.add_all(
            [
                Student(id='s-1', user_id='u-student', skills=['python', 'sql']),
                Mentor(id='m-1', user_id='u-mentor', expertise=['data']),
                Employer(id='e-1', user_id='u-employer', company_name='Acme'),
            ]
        )
        db.commit()
    finally:
        db.close()
    return SqlDataStore(session_factory)


def test_list_users_by_role_includes_role_record_ids(sql_store) -> None:
    users = {user.id: user for user in sql_store.list_users_by_role(UserRole.STUDENT)}

    assert set(users) == {'u-student', 'u-lonely'}
    assert users['u-student'].role_record_ids == ['s-1']
    assert users['u-lonely'].role_record_ids == []
    assert users['u-student'].role is UserRole.STUDENT


def test_list_users_by_role_filters_by_role(sql_store) -> None:
    mentors = sql_store.list_users_by_role(UserRole.MENTOR)

    assert [(mentor.id, mentor.role_record_ids) for mentor in mentors] == [('u-mentor', ['m-1'])]


def test_get_profile_embeds_role_records(sql_store) -> None:
    profile = sql_store.get_profile('u-student')

    assert profile.name == 'Stu Dent'
    assert [student.skills for student in profile.students] == [['python', 'sql']]
    assert profile.mentors == []


def test_lookups_return_none_for_missing_rows(sql_store) -> None:
    assert sql_store.get_user('missing') is None
    assert sql_store.get_profile('missing') is None
    assert sql_store.get_student('missing') is None
    assert sql_store.get_mentor_by_user('u-student') is None


def test_role_specific_lookups(sql_store) -> None:
    assert sql_store.get_student('s-1').user_id == 'u-student'
    assert sql_store.get_student_by_user('u-student').id == 's-1'
    assert sql_store.get_mentor_by_user('u-mentor').expertise == ['data']
    assert sql_store.get_employer_by_user('u-employer').company_name == 'Acme'


def test_create_user_and_role_record(sql_store) -> None:
    user = sql_store.create_user('u-new', 'New Hire', 'new@example.com', UserRole.EMPLOYER)
    sql_store.create_role_record(UserRole.EMPLOYER, 'u-new', 'New Hire')

    assert user.role is UserRole.EMPLOYER
    assert sql_store.get_employer_by_user('u-new').company_name == 'New Hire'


def test_duplicate_user_raises_collaborator_error(sql_store) -> None:
    with pytest.raises(CollaboratorError):
        sql_store.create_user('u-student', 'Again', 'again@example.com', UserRole.STUDENT)
