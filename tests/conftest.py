import os

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
os.environ.setdefault('DATA_STORE', 'sql')
os.environ.setdefault('SUPABASE_URL', 'https://project.supabase.co')
os.environ.setdefault('SUPABASE_ANON_KEY', 'anon-key')
os.environ.setdefault('SUPABASE_SERVICE_ROLE_KEY', 'service-key')
os.environ.setdefault('SUPABASE_JWT_SECRET', 'test-secret-with-enough-length-for-hs256')

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from industryhunt.core.errors import CollaboratorError  # noqa: E402
from industryhunt.database import Base  # noqa: E402
from industryhunt.dependencies import get_data_store  # noqa: E402
from industryhunt.main import create_app  # noqa: E402
from industryhunt.models import assessment, job, mentor_expertise, project, session  # noqa: E402,F401
from industryhunt.models.employer import Employer  # noqa: E402
from industryhunt.models.mentor import Mentor  # noqa: E402
from industryhunt.models.roles import UserRole  # noqa: E402
from industryhunt.models.skill import Skill  # noqa: E402
from industryhunt.models.student import Student  # noqa: E402
from industryhunt.models.user import User  # noqa: E402
from industryhunt.schemas import (  # noqa: E402
    AuthResult,
    AuthSession,
    AuthUser,
    DirectoryUser,
    EmployerRecord,
    MentorRecord,
    StudentRecord,
    UserProfile,
    UserRecord,
)
from industryhunt.services.sql_store import SqlDataStore  # noqa: E402


class FakeAuthClient:
    """Records every call; ``error`` makes the next calls fail like Supabase would."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.error: Exception | None = None
        self.sign_up_result = AuthResult(user=AuthUser(id='user-1', email='new@example.com', aud='authenticated'))
        self.sign_in_result = AuthResult(
            user=AuthUser(
                id='user-1',
                email='student@example.com',
                aud='authenticated',
                email_confirmed_at='2024-01-01T00:00:00Z',
            ),
            session=AuthSession(access_token='access-123', refresh_token='refresh-456'),
        )
        self.user = AuthUser(id='user-1', email='student@example.com', aud='authenticated')

    def _record(self, *call):
        self.calls.append(call)
        if self.error is not None:
            raise self.error

    def reset_password_for_email(self, email, redirect_to=None):
        self._record('reset_password_for_email', email, redirect_to)

    def update_password(self, access_token, password):
        self._record('update_password', access_token, password)

    def sign_up(self, email, password):
        self._record('sign_up', email, password)
        return self.sign_up_result

    def sign_in_with_password(self, email, password):
        self._record('sign_in_with_password', email, password)
        return self.sign_in_result

    def sign_out(self, access_token):
        self._record('sign_out', access_token)

    def resend_signup_confirmation(self, email):
        self._record('resend_signup_confirmation', email)

    def get_user(self, access_token):
        self._record('get_user', access_token)
        return self.user


class FakeDataStore:
    def __init__(self):
        self.users: dict[str, UserRecord] = {}
        self.role_records: dict[str, list[str]] = {}
        self.students: list[StudentRecord] = []
        self.mentors: list[MentorRecord] = []
        self.employers: list[EmployerRecord] = []
        self.error: Exception | None = None
        self.calls: list[tuple] = []

    def _record(self, *call):
        self.calls.append(call)
        if self.error is not None:
            raise self.error

    def add_user(self, user_id, name, role, email=None, role_record_ids=()):
        self.users[user_id] = UserRecord(
            id=user_id,
            name=name,
            email=email or f'{user_id}@example.com',
            role=role,
        )
        self.role_records[user_id] = list(role_record_ids)
        return self.users[user_id]

    def list_users_by_role(self, role):
        self._record('list_users_by_role', role)
        return [
            DirectoryUser(**user.model_dump(), role_record_ids=self.role_records.get(user.id, []))
            for user in self.users.values()
            if user.role is role
        ]

    def get_user(self, user_id):
        self._record('get_user', user_id)
        return self.users.get(user_id)

    def get_profile(self, user_id):
        self._record('get_profile', user_id)
        user = self.users.get(user_id)
        if user is None:
            return None
        return UserProfile(
            **user.model_dump(),
            students=[s for s in self.students if s.user_id == user_id],
            mentors=[m for m in self.mentors if m.user_id == user_id],
            employers=[e for e in self.employers if e.user_id == user_id],
        )

    def get_student(self, student_id):
        self._record('get_student', student_id)
        return next((s for s in self.students if s.id == student_id), None)

    def get_mentor(self, mentor_id):
        self._record('get_mentor', mentor_id)
        return next((m for m in self.mentors if m.id == mentor_id), None)

    def get_employer(self, employer_id):
        self._record('get_employer', employer_id)
        return next((e for e in self.employers if e.id == employer_id), None)

    def get_student_by_user(self, user_id):
        self._record('get_student_by_user', user_id)
        return next((s for s in self.students if s.user_id == user_id), None)

    def get_mentor_by_user(self, user_id):
        self._record('get_mentor_by_user', user_id)
        return next((m for m in self.mentors if m.user_id == user_id), None)

    def get_employer_by_user(self, user_id):
        self._record('get_employer_by_user', user_id)
        return next((e for e in self.employers if e.user_id == user_id), None)

    def create_user(self, user_id, name, email, role):
        self._record('create_user', user_id, name, email, role)
        return self.add_user(user_id, name, role, email=email)

    def create_role_record(self, role, user_id, name):
        self._record('create_role_record', role, user_id, name)
        if role is UserRole.STUDENT:
            self.students.append(StudentRecord(id=f'student-{user_id}', user_id=user_id))
        elif role is UserRole.MENTOR:
            self.mentors.append(MentorRecord(id=f'mentor-{user_id}', user_id=user_id))
        else:
            self.employers.append(EmployerRecord(id=f'employer-{user_id}', user_id=user_id, company_name=name))


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def store() -> FakeDataStore:
    return FakeDataStore()


@pytest.fixture
def collaborator_error():
    def build(message: str, code: str | None = None) -> CollaboratorError:
        return CollaboratorError(message, code=code, status_code=400)

    return build


@pytest.fixture
def platform_store():
    """SqlDataStore over a fresh in-memory database with every table.

    Seeded with two students, a mentor, an employer and a small skill
    catalogue.
    """
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db = session_factory()
    try:
        db.add_all(
            [
                User(id='u-student', name='Stu Dent', email='stu@example.com', role='STUDENT'),
                User(id='u-ada', name='Ada', email='ada@example.com', role='STUDENT', avatar_url='/ada.png'),
                User(id='u-mentor', name='Men Tor', email='mentor@example.com', role='MENTOR'),
                User(id='u-employer', name='Acme HR', email='hr@acme.test', role='EMPLOYER'),
            ]
        )
        db.add_all(
            [
                Student(id='s-1', user_id='u-student', skills=['Python', 'SQL']),
                Student(id='s-2', user_id='u-ada', skills=[]),
                Mentor(id='m-1', user_id='u-mentor'),
                Employer(id='e-1', user_id='u-employer', company_name='Acme'),
                Skill(id='sk-python', name='Python', category='Language'),
                Skill(id='sk-react', name='React', category='Frontend'),
                Skill(id='sk-docker', name='Docker', category=None),
            ]
        )
        db.commit()
    finally:
        db.close()

    try:
        yield SqlDataStore(session_factory)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def platform_client(platform_store):
    app = create_app()
    app.dependency_overrides[get_data_store] = lambda: platform_store
    return TestClient(app)
