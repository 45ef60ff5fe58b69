from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, sessionmaker

from industryhunt.core.errors import CollaboratorError
from industryhunt.models.assessment import AssessmentQuestion
from industryhunt.models.employer import Employer
from industryhunt.models.job import Job, JobApplication
from industryhunt.models.mentor import Mentor
from industryhunt.models.mentor_expertise import MentorExpertise
from industryhunt.models.project import Project, ProjectApplicant
from industryhunt.models.roles import UserRole
from industryhunt.models.session import EmployerSession, MentorshipSession
from industryhunt.models.skill import Skill
from industryhunt.models.student import Student
from industryhunt.models.user import User
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
from industryhunt.services.store import ROLE_RELATIONSHIPS


def _filters(*pairs) -> list:
    """Equality criteria for the (column, value) pairs whose value is set."""
    return [column == value for column, value in pairs if value is not None]


class SqlDataStore:
    """DataStore backed by SQLAlchemy sessions, one per call."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self):
        db: Session = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            raise CollaboratorError(str(exc.__cause__ or exc)) from exc
        finally:
            db.close()

    def _list(self, model, record_type, criteria: list, order_by: tuple) -> list:
        with self._session() as db:
            rows = db.query(model).filter(*criteria).order_by(*order_by).all()
            return [record_type.model_validate(row) for row in rows]

    def _get(self, model, record_type, record_id: str):
        with self._session() as db:
            row = db.get(model, record_id)
            return record_type.model_validate(row) if row else None

    def _create(self, model, record_type, values: dict):
        with self._session() as db:
            row = model(**values)
            db.add(row)
            db.commit()
            db.refresh(row)
            return record_type.model_validate(row)

    def _update(self, model, record_type, record_id: str, changes: dict):
        with self._session() as db:
            row = db.get(model, record_id)
            if row is None:
                return None
            for field, value in changes.items():
                setattr(row, field, value)
            db.commit()
            db.refresh(row)
            return record_type.model_validate(row)

    def _delete(self, model, *criteria) -> None:
        with self._session() as db:
            db.query(model).filter(*criteria).delete(synchronize_session=False)
            db.commit()

    def list_users_by_role(self, role: UserRole) -> list[DirectoryUser]:
        relationship_name = ROLE_RELATIONSHIPS[role]
        with self._session() as db:
            users = (
                db.query(User)
                .options(selectinload(getattr(User, relationship_name)))
                .filter(User.role == role.value)
                .order_by(User.created_at, User.id)
                .all()
            )
            return [
                DirectoryUser(
                    id=user.id,
                    name=user.name,
                    email=user.email,
                    avatar_url=user.avatar_url,
                    bio=user.bio,
                    role=user.role,
                    created_at=user.created_at,
                    updated_at=user.updated_at,
                    role_record_ids=[record.id for record in getattr(user, relationship_name)],
                )
                for user in users
            ]

    def get_user(self, user_id: str) -> UserRecord | None:
        with self._session() as db:
            user = db.query(User).filter(User.id == user_id).first()
            return UserRecord.model_validate(user) if user else None

    def get_profile(self, user_id: str) -> UserProfile | None:
        with self._session() as db:
            user = (
                db.query(User)
                .options(
                    selectinload(User.students),
                    selectinload(User.mentors),
                    selectinload(User.employers),
                )
                .filter(User.id == user_id)
                .first()
            )
            return UserProfile.model_validate(user) if user else None

    def get_student(self, student_id: str) -> StudentRecord | None:
        with self._session() as db:
            student = db.query(Student).filter(Student.id == student_id).first()
            return StudentRecord.model_validate(student) if student else None

    def get_mentor(self, mentor_id: str) -> MentorRecord | None:
        return self._get(Mentor, MentorRecord, mentor_id)

    def get_employer(self, employer_id: str) -> EmployerRecord | None:
        return self._get(Employer, EmployerRecord, employer_id)

    def get_student_by_user(self, user_id: str) -> StudentRecord | None:
        with self._session() as db:
            student = db.query(Student).filter(Student.user_id == user_id).first()
            return StudentRecord.model_validate(student) if student else None

    def get_mentor_by_user(self, user_id: str) -> MentorRecord | None:
        with self._session() as db:
            mentor = db.query(Mentor).filter(Mentor.user_id == user_id).first()
            return MentorRecord.model_validate(mentor) if mentor else None

    def get_employer_by_user(self, user_id: str) -> EmployerRecord | None:
        with self._session() as db:
            employer = db.query(Employer).filter(Employer.user_id == user_id).first()
            return EmployerRecord.model_validate(employer) if employer else None

    def create_user(self, user_id: str, name: str, email: str, role: UserRole) -> UserRecord:
        with self._session() as db:
            user = User(id=user_id, name=name, email=email, role=role.value)
            db.add(user)
            db.commit()
            db.refresh(user)
            return UserRecord.model_validate(user)

    def create_role_record(self, role: UserRole, user_id: str, name: str) -> None:
        with self._session() as db:
            if role is UserRole.STUDENT:
                db.add(Student(user_id=user_id))
            elif role is UserRole.MENTOR:
                db.add(Mentor(user_id=user_id))
            else:
                db.add(Employer(user_id=user_id, company_name=name))
            db.commit()

    def list_skills(self) -> list[SkillRecord]:
        return self._list(Skill, SkillRecord, [], (Skill.name,))

    def get_skill(self, skill_id: str) -> SkillRecord | None:
        return self._get(Skill, SkillRecord, skill_id)

    def get_skill_by_name(self, name: str) -> SkillRecord | None:
        skills = self._list(Skill, SkillRecord, [Skill.name == name], ())
        return skills[0] if skills else None

    def create_skill(self, name: str, category: str | None) -> SkillRecord:
        return self._create(Skill, SkillRecord, {'name': name, 'category': category})

    def list_jobs(self, employer_id: str | None = None, status: str | None = None) -> list[JobRecord]:
        criteria = _filters((Job.employer_id, employer_id), (Job.status, status))
        return self._list(Job, JobRecord, criteria, (Job.created_at.desc(), Job.id))

    def get_job(self, job_id: str) -> JobRecord | None:
        return self._get(Job, JobRecord, job_id)

    def create_job(self, values: dict) -> JobRecord:
        return self._create(Job, JobRecord, values)

    def update_job(self, job_id: str, changes: dict) -> JobRecord | None:
        return self._update(Job, JobRecord, job_id, changes)

    def delete_job(self, job_id: str) -> None:
        self._delete(JobApplication, JobApplication.job_id == job_id)
        self._delete(Job, Job.id == job_id)

    def list_job_applications(
        self,
        job_id: str | None = None,
        student_id: str | None = None,
        status: str | None = None,
    ) -> list[JobApplicationRecord]:
        criteria = _filters(
            (JobApplication.job_id, job_id),
            (JobApplication.student_id, student_id),
            (JobApplication.status, status),
        )
        order_by = (JobApplication.created_at.desc(), JobApplication.id)
        return self._list(JobApplication, JobApplicationRecord, criteria, order_by)

    def get_job_application(self, application_id: str) -> JobApplicationRecord | None:
        return self._get(JobApplication, JobApplicationRecord, application_id)

    def create_job_application(self, values: dict) -> JobApplicationRecord:
        return self._create(JobApplication, JobApplicationRecord, values)

    def update_job_application(self, application_id: str, changes: dict) -> JobApplicationRecord | None:
        return self._update(JobApplication, JobApplicationRecord, application_id, changes)

    def delete_job_application(self, application_id: str) -> None:
        self._delete(JobApplication, JobApplication.id == application_id)

    def list_projects(self, employer_id: str | None = None, status: str | None = None) -> list[ProjectRecord]:
        criteria = _filters((Project.employer_id, employer_id), (Project.status, status))
        return self._list(Project, ProjectRecord, criteria, (Project.created_at.desc(), Project.id))

    def get_project(self, project_id: str) -> ProjectRecord | None:
        return self._get(Project, ProjectRecord, project_id)

    def create_project(self, values: dict) -> ProjectRecord:
        return self._create(Project, ProjectRecord, values)

    def update_project(self, project_id: str, changes: dict) -> ProjectRecord | None:
        return self._update(Project, ProjectRecord, project_id, changes)

    def delete_project(self, project_id: str) -> None:
        self._delete(ProjectApplicant, ProjectApplicant.project_id == project_id)
        self._delete(Project, Project.id == project_id)

    def list_project_applications(
        self,
        project_id: str | None = None,
        student_id: str | None = None,
        status: str | None = None,
    ) -> list[ProjectApplicationRecord]:
        criteria = _filters(
            (ProjectApplicant.project_id, project_id),
            (ProjectApplicant.student_id, student_id),
            (ProjectApplicant.status, status),
        )
        order_by = (ProjectApplicant.applied_at.desc(), ProjectApplicant.id)
        return self._list(ProjectApplicant, ProjectApplicationRecord, criteria, order_by)

    def create_project_application(self, values: dict) -> ProjectApplicationRecord:
        return self._create(ProjectApplicant, ProjectApplicationRecord, values)

    def list_mentor_expertise(self, mentor_id: str) -> list[ExpertiseRecord]:
        criteria = [MentorExpertise.mentor_id == mentor_id]
        order_by = (MentorExpertise.created_at, MentorExpertise.id)
        return self._list(MentorExpertise, ExpertiseRecord, criteria, order_by)

    def create_expertise(self, values: dict) -> ExpertiseRecord:
        return self._create(MentorExpertise, ExpertiseRecord, values)

    def update_expertise(self, expertise_id: str, changes: dict) -> ExpertiseRecord | None:
        return self._update(MentorExpertise, ExpertiseRecord, expertise_id, changes)

    def delete_expertise(self, expertise_id: str) -> None:
        self._delete(MentorExpertise, MentorExpertise.id == expertise_id)

    def list_mentorship_sessions(
        self,
        mentor_id: str | None = None,
        student_id: str | None = None,
    ) -> list[MentorshipSessionRecord]:
        criteria = _filters(
            (MentorshipSession.mentor_id, mentor_id),
            (MentorshipSession.student_id, student_id),
        )
        order_by = (MentorshipSession.date, MentorshipSession.time, MentorshipSession.id)
        return self._list(MentorshipSession, MentorshipSessionRecord, criteria, order_by)

    def create_mentorship_session(self, values: dict) -> MentorshipSessionRecord:
        return self._create(MentorshipSession, MentorshipSessionRecord, values)

    def update_mentorship_session(self, session_id: str, changes: dict) -> MentorshipSessionRecord | None:
        return self._update(MentorshipSession, MentorshipSessionRecord, session_id, changes)

    def delete_mentorship_session(self, session_id: str) -> None:
        self._delete(MentorshipSession, MentorshipSession.id == session_id)

    def list_employer_sessions(self, employer_id: str) -> list[EmployerSessionRecord]:
        criteria = [EmployerSession.employer_id == employer_id]
        order_by = (EmployerSession.date, EmployerSession.time, EmployerSession.id)
        return self._list(EmployerSession, EmployerSessionRecord, criteria, order_by)

    def create_employer_session(self, values: dict) -> EmployerSessionRecord:
        return self._create(EmployerSession, EmployerSessionRecord, values)

    def update_employer_session(self, session_id: str, changes: dict) -> EmployerSessionRecord | None:
        return self._update(EmployerSession, EmployerSessionRecord, session_id, changes)

    def delete_employer_session(self, session_id: str) -> None:
        self._delete(EmployerSession, EmployerSession.id == session_id)

    def list_assessment_questions(self, employer_id: str) -> list[AssessmentQuestionRecord]:
        criteria = [AssessmentQuestion.employer_id == employer_id]
        order_by = (AssessmentQuestion.created_at.desc(), AssessmentQuestion.id)
        return self._list(AssessmentQuestion, AssessmentQuestionRecord, criteria, order_by)

    def create_assessment_question(self, values: dict) -> AssessmentQuestionRecord:
        return self._create(AssessmentQuestion, AssessmentQuestionRecord, values)

    def delete_assessment_question(self, question_id: str, employer_id: str) -> None:
        self._delete(
            AssessmentQuestion,
            AssessmentQuestion.id == question_id,
            AssessmentQuestion.employer_id == employer_id,
        )
