"""
Data store interface for the platform tables.

Each area has its own protocol so fakes and alternative backends can
implement only what they need; :class:`DataStore` is the union the app
wires in.
"""

from typing import Protocol

from industryhunt.models.roles import UserRole
from industryhunt.schemas import (
    AssessmentQuestionRecord,
    DirectoryUser,
    EmployerRecord,
    EmployerSessionRecord,
    ExpertiseRecord,
    JobApplicationRecord,
    JobRecord,
    MentorRecord,
    MentorshipSessionRecord,
    ProjectApplicationRecord,
    ProjectRecord,
    SkillRecord,
    StudentRecord,
    UserProfile,
    UserRecord,
)

# Table holding the role-specific rows for each role.
ROLE_RELATIONSHIPS = {
    UserRole.STUDENT: 'students',
    UserRole.MENTOR: 'mentors',
    UserRole.EMPLOYER: 'employers',
}


class AccountStore(Protocol):
    def list_users_by_role(self, role: UserRole) -> list[DirectoryUser]:
        ...

    def get_user(self, user_id: str) -> UserRecord | None:
        ...

    def get_profile(self, user_id: str) -> UserProfile | None:
        ...

    def get_student(self, student_id: str) -> StudentRecord | None:
        ...

    def get_mentor(self, mentor_id: str) -> MentorRecord | None:
        ...

    def get_employer(self, employer_id: str) -> EmployerRecord | None:
        ...

    def get_student_by_user(self, user_id: str) -> StudentRecord | None:
        ...

    def get_mentor_by_user(self, user_id: str) -> MentorRecord | None:
        ...

    def get_employer_by_user(self, user_id: str) -> EmployerRecord | None:
        ...

    def create_user(self, user_id: str, name: str, email: str, role: UserRole) -> UserRecord:
        ...

    def create_role_record(self, role: UserRole, user_id: str, name: str) -> None:
        ...


class SkillStore(Protocol):
    def list_skills(self) -> list[SkillRecord]:
        """All skills ordered by name."""

    def get_skill(self, skill_id: str) -> SkillRecord | None:
        ...

    def get_skill_by_name(self, name: str) -> SkillRecord | None:
        ...

    def create_skill(self, name: str, category: str | None) -> SkillRecord:
        ...


class JobStore(Protocol):
    """Jobs and job applications. Listings come back newest first."""

    def list_jobs(self, employer_id: str | None = None, status: str | None = None) -> list[JobRecord]:
        ...

    def get_job(self, job_id: str) -> JobRecord | None:
        ...

    def create_job(self, values: dict) -> JobRecord:
        ...

    def update_job(self, job_id: str, changes: dict) -> JobRecord | None:
        ...

    def delete_job(self, job_id: str) -> None:
        ...

    def list_job_applications(
        self,
        job_id: str | None = None,
        student_id: str | None = None,
        status: str | None = None,
    ) -> list[JobApplicationRecord]:
        ...

    def get_job_application(self, application_id: str) -> JobApplicationRecord | None:
        ...

    def create_job_application(self, values: dict) -> JobApplicationRecord:
        ...

    def update_job_application(self, application_id: str, changes: dict) -> JobApplicationRecord | None:
        ...

    def delete_job_application(self, application_id: str) -> None:
        ...


class ProjectStore(Protocol):
    """Projects and their applicants. Listings come back newest first."""

    def list_projects(self, employer_id: str | None = None, status: str | None = None) -> list[ProjectRecord]:
        ...

    def get_project(self, project_id: str) -> ProjectRecord | None:
        ...

    def create_project(self, values: dict) -> ProjectRecord:
        ...

    def update_project(self, project_id: str, changes: dict) -> ProjectRecord | None:
        ...

    def delete_project(self, project_id: str) -> None:
        ...

    def list_project_applications(
        self,
        project_id: str | None = None,
        student_id: str | None = None,
        status: str | None = None,
    ) -> list[ProjectApplicationRecord]:
        ...

    def create_project_application(self, values: dict) -> ProjectApplicationRecord:
        ...


class MentorshipStore(Protocol):
    """Mentor expertise and scheduled sessions. Sessions come back by date."""

    def list_mentor_expertise(self, mentor_id: str) -> list[ExpertiseRecord]:
        ...

    def create_expertise(self, values: dict) -> ExpertiseRecord:
        ...

    def update_expertise(self, expertise_id: str, changes: dict) -> ExpertiseRecord | None:
        ...

    def delete_expertise(self, expertise_id: str) -> None:
        ...

    def list_mentorship_sessions(
        self,
        mentor_id: str | None = None,
        student_id: str | None = None,
    ) -> list[MentorshipSessionRecord]:
        ...

    def create_mentorship_session(self, values: dict) -> MentorshipSessionRecord:
        ...

    def update_mentorship_session(self, session_id: str, changes: dict) -> MentorshipSessionRecord | None:
        ...

    def delete_mentorship_session(self, session_id: str) -> None:
        ...

    def list_employer_sessions(self, employer_id: str) -> list[EmployerSessionRecord]:
        ...

    def create_employer_session(self, values: dict) -> EmployerSessionRecord:
        ...

    def update_employer_session(self, session_id: str, changes: dict) -> EmployerSessionRecord | None:
        ...

    def delete_employer_session(self, session_id: str) -> None:
        ...


class AssessmentStore(Protocol):
    def list_assessment_questions(self, employer_id: str) -> list[AssessmentQuestionRecord]:
        ...

    def create_assessment_question(self, values: dict) -> AssessmentQuestionRecord:
        ...

    def delete_assessment_question(self, question_id: str, employer_id: str) -> None:
        ...


class DataStore(AccountStore, SkillStore, JobStore, ProjectStore, MentorshipStore, AssessmentStore, Protocol):
    ...
