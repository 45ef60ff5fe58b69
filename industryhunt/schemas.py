"""
Data transfer objects shared by the data stores, services and routes.
"""

from datetime import date, datetime, time
from typing import Any

from pydantic import BaseModel, Field, field_validator

from industryhunt.models.roles import UserRole


class UserRecord(BaseModel):
    id: str
    name: str = ''
    email: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    role: UserRole
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator('role', mode='before')
    @classmethod
    def parse_role(cls, value):
        return UserRole.parse(value)

    @field_validator('name', mode='before')
    @classmethod
    def default_name(cls, value):
        return value or ''

    class Config:
        from_attributes = True


class DirectoryUser(UserRecord):
    """A user plus the ids of its role-specific rows, oldest first."""
    role_record_ids: list[str] = Field(default_factory=list)


class StudentRecord(BaseModel):
    id: str
    user_id: str
    education: str | None = None
    skills: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)

    @field_validator('skills', 'interests', mode='before')
    @classmethod
    def default_list(cls, value):
        return value or []

    class Config:
        from_attributes = True


class MentorRecord(BaseModel):
    id: str
    user_id: str
    expertise: list[str] = Field(default_factory=list)
    years_of_experience: int | None = None
    hourly_rate: float | None = None

    @field_validator('expertise', mode='before')
    @classmethod
    def default_list(cls, value):
        return value or []

    class Config:
        from_attributes = True


class EmployerRecord(BaseModel):
    id: str
    user_id: str
    company_name: str = ''
    industry: str | None = None
    company_size: str | None = None
    website: str | None = None

    class Config:
        from_attributes = True


class UserProfile(UserRecord):
    """A user row with every role-specific row embedded."""
    students: list[StudentRecord] = Field(default_factory=list)
    mentors: list[MentorRecord] = Field(default_factory=list)
    employers: list[EmployerRecord] = Field(default_factory=list)


class DirectoryEntry(BaseModel):
    id: str
    userId: str
    name: str
    email: str | None = None
    avatar_url: str | None = None


class SkillType(BaseModel):
    id: str
    name: str
    category: str


class SkillEntry(BaseModel):
    id: str
    skill: SkillType
    level: int
    verified: bool


class Activity(BaseModel):
    id: str
    type: str
    title: str
    date: datetime
    status: str | None = None
    progress: int | None = None


class DashboardStats(BaseModel):
    skills_count: int = 0
    projects_count: int = 0
    courses_count: int = 0
    sessions_count: int = 0


class AuthUser(BaseModel):
    """The account as the auth service reports it."""
    id: str
    email: str | None = None
    aud: str | None = None
    email_confirmed_at: str | None = None


class AuthSession(BaseModel):
    access_token: str
    refresh_token: str
    expires_in: int | None = None
    token_type: str = 'bearer'


class AuthResult(BaseModel):
    user: AuthUser | None = None
    session: AuthSession | None = None


def merge_profile(profile: UserProfile, auth_user: AuthUser, **extra: Any) -> dict:
    """Combine a stored profile with the auth fields the client relies on."""
    payload = profile.model_dump(mode='json')
    payload.update(
        id=auth_user.id,
        aud=auth_user.aud,
        email_confirmed_at=auth_user.email_confirmed_at,
    )
    payload.update(extra)
    return payload


class SkillRecord(BaseModel):
    id: str
    name: str
    category: str | None = None

    class Config:
        from_attributes = True


class JobRecord(BaseModel):
    id: str
    employer_id: str
    title: str
    description: str
    requirements: str | None = None
    location: str | None = None
    salary_range: str | None = None
    deadline: datetime | None = None
    status: str = 'ACTIVE'
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class JobSummary(JobRecord):
    company_name: str | None = None
    applications_count: int = 0


class JobApplicant(BaseModel):
    id: str
    status: str
    created_at: datetime | None = None
    cover_letter: str | None = None
    student_id: str
    student_name: str | None = None
    student_email: str | None = None
    student_avatar: str | None = None


class JobDetail(JobSummary):
    applications: list[JobApplicant] = Field(default_factory=list)


class JobApplicationRecord(BaseModel):
    id: str
    job_id: str
    student_id: str
    cover_letter: str | None = None
    status: str = 'PENDING'
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class ApplicationJob(BaseModel):
    """The job an application points at, as the student sees it."""
    id: str | None = None
    title: str | None = None
    description: str | None = None
    requirements: str | None = None
    location: str | None = None
    salary_range: str | None = None
    deadline: datetime | None = None
    status: str | None = None
    company_name: str | None = None


class JobApplicationView(BaseModel):
    id: str
    status: str
    cover_letter: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    student_id: str
    job: ApplicationJob


class ProjectRecord(BaseModel):
    id: str
    employer_id: str
    title: str
    description: str
    is_paid: bool = False
    budget: float | None = None
    deadline: datetime | None = None
    status: str = 'OPEN'
    technologies: list[str] = Field(default_factory=list)
    assigned_students: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator('technologies', 'assigned_students', mode='before')
    @classmethod
    def default_list(cls, value):
        return value or []

    @field_validator('is_paid', mode='before')
    @classmethod
    def default_paid(cls, value):
        return bool(value)

    class Config:
        from_attributes = True


class ProjectApplicationRecord(BaseModel):
    id: str
    project_id: str
    student_id: str
    cover_letter: str | None = None
    status: str = 'PENDING'
    applied_at: datetime | None = None

    class Config:
        from_attributes = True


class PersonRef(BaseModel):
    """Display name and avatar for the other party of a listing."""
    id: str
    name: str
    avatar_url: str | None = None


class ProjectSummary(ProjectRecord):
    company_name: str | None = None
    applications_count: int = 0


class ProjectApplicant(BaseModel):
    id: str
    status: str
    cover_letter: str | None = None
    applied_at: datetime | None = None
    student: PersonRef


class ProjectDetail(ProjectSummary):
    applicants: list[ProjectApplicant] = Field(default_factory=list)


class ProjectCard(BaseModel):
    id: str
    title: str
    description: str
    is_paid: bool = False
    budget: float | None = None
    deadline: datetime | None = None
    status: str
    created_at: datetime | None = None
    company_name: str | None = None
    technologies: list[str] = Field(default_factory=list)


class ApplicationRef(BaseModel):
    id: str
    status: str
    cover_letter: str | None = None
    applied_at: datetime | None = None


class StudentProject(ProjectCard):
    """A project the student applied to or was assigned."""
    application: ApplicationRef | None = None
    assigned: bool = False


class AvailableProject(ProjectCard):
    relevance_score: float = 0.0


class MarketplaceProject(ProjectCard):
    type: str = 'AVAILABLE'
    applied: bool | None = None


class ExpertiseRecord(BaseModel):
    id: str
    mentor_id: str
    skill_id: str
    level: int

    class Config:
        from_attributes = True


class Expertise(BaseModel):
    id: str
    name: str
    category: str
    skill_id: str
    level: int


class MentorshipSessionRecord(BaseModel):
    id: str
    mentor_id: str
    student_id: str
    title: str
    description: str | None = ''
    date: date
    time: time
    status: str = 'PENDING'
    zoom_link: str | None = ''
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class MentorshipSessionView(MentorshipSessionRecord):
    mentor: PersonRef | None = None
    student: PersonRef | None = None


class EmployerSessionRecord(BaseModel):
    id: str
    employer_id: str
    applicant_id: str
    job_id: str | None = None
    title: str
    description: str | None = ''
    date: date
    time: time
    status: str = 'PENDING'
    meeting_link: str | None = ''
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class JobRef(BaseModel):
    id: str
    title: str


class EmployerSessionView(EmployerSessionRecord):
    applicant: PersonRef | None = None
    job: JobRef | None = None
    zoom_link: str | None = ''


class AssessmentQuestionRecord(BaseModel):
    id: str
    employer_id: str
    job_id: str | None = None
    question: str
    options: list[str] = Field(default_factory=list)
    correct_option: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True
