"""
DataStore backed by the Supabase PostgREST API.
"""

from datetime import date, time

import httpx

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
from industryhunt.services.store import ROLE_RELATIONSHIPS
from industryhunt.services.supabase import build_http_client, raise_for_supabase_error

USER_COLUMNS = 'id,name,email,avatar_url,bio,role,created_at,updated_at'


def _eq(value: str) -> str:
    return f'eq.{value}'


def _filters(**columns) -> dict:
    return {name: _eq(value) for name, value in columns.items() if value is not None}


def _encode(values: dict) -> dict:
    # date also covers datetime.
    return {
        key: value.isoformat() if isinstance(value, (date, time)) else value
        for key, value in values.items()
    }


class RestDataStore:
    def __init__(
        self,
        base_url: str,
        service_key: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._http = build_http_client(base_url, service_key, timeout=timeout, transport=transport)
        self._http.headers['Authorization'] = f'Bearer {service_key}'

    def close(self) -> None:
        self._http.close()

    def _select(self, table: str, params: dict) -> list[dict]:
        response = self._http.get(f'/rest/v1/{table}', params=params)
        raise_for_supabase_error(response)
        return response.json()

    def _select_first(self, table: str, params: dict) -> dict | None:
        rows = self._select(table, {**params, 'limit': '1'})
        return rows[0] if rows else None

    def _insert(self, table: str, row: dict) -> list[dict]:
        response = self._http.post(
            f'/rest/v1/{table}',
            json=row,
            headers={'Prefer': 'return=representation'},
        )
        raise_for_supabase_error(response)
        return response.json()

    def _patch(self, table: str, params: dict, changes: dict) -> list[dict]:
        response = self._http.patch(
            f'/rest/v1/{table}',
            params=params,
            json=changes,
            headers={'Prefer': 'return=representation'},
        )
        raise_for_supabase_error(response)
        return response.json()

    def _remove(self, table: str, params: dict) -> None:
        response = self._http.delete(f'/rest/v1/{table}', params=params)
        raise_for_supabase_error(response)

    def _list(self, table: str, record_type, order: str, **columns) -> list:
        rows = self._select(table, {'select': '*', 'order': order, **_filters(**columns)})
        return [record_type.model_validate(row) for row in rows]

    def _get(self, table: str, record_type, record_id: str):
        row = self._select_first(table, {'select': '*', 'id': _eq(record_id)})
        return record_type.model_validate(row) if row else None

    def _create(self, table: str, record_type, values: dict):
        rows = self._insert(table, _encode(values))
        return record_type.model_validate(rows[0])

    def _update(self, table: str, record_type, record_id: str, changes: dict):
        rows = self._patch(table, {'id': _eq(record_id)}, _encode(changes))
        return record_type.model_validate(rows[0]) if rows else None

    def _delete(self, table: str, **columns) -> None:
        self._remove(table, _filters(**columns))

    def list_users_by_role(self, role: UserRole) -> list[DirectoryUser]:
        relationship_name = ROLE_RELATIONSHIPS[role]
        rows = self._select(
            'users',
            {
                'select': f'{USER_COLUMNS},{relationship_name}(id)',
                'role': _eq(role.value),
                'order': 'created_at.asc',
            },
        )
        users = []
        for row in rows:
            linked = row.pop(relationship_name, None) or []
            # A one-to-one relationship is embedded as a single object.
            if isinstance(linked, dict):
                linked = [linked]
            users.append(
                DirectoryUser(**row, role_record_ids=[record['id'] for record in linked])
            )
        return users

    def get_user(self, user_id: str) -> UserRecord | None:
        row = self._select_first('users', {'select': USER_COLUMNS, 'id': _eq(user_id)})
        return UserRecord.model_validate(row) if row else None

    def get_profile(self, user_id: str) -> UserProfile | None:
        row = self._select_first(
            'users',
            {'select': '*,students(*),mentors(*),employers(*)', 'id': _eq(user_id)},
        )
        return UserProfile.model_validate(row) if row else None

    def get_student(self, student_id: str) -> StudentRecord | None:
        row = self._select_first('students', {'select': '*', 'id': _eq(student_id)})
        return StudentRecord.model_validate(row) if row else None

    def get_mentor(self, mentor_id: str) -> MentorRecord | None:
        return self._get('mentors', MentorRecord, mentor_id)

    def get_employer(self, employer_id: str) -> EmployerRecord | None:
        return self._get('employers', EmployerRecord, employer_id)

    def get_student_by_user(self, user_id: str) -> StudentRecord | None:
        row = self._select_first('students', {'select': '*', 'user_id': _eq(user_id)})
        return StudentRecord.model_validate(row) if row else None

    def get_mentor_by_user(self, user_id: str) -> MentorRecord | None:
        row = self._select_first('mentors', {'select': '*', 'user_id': _eq(user_id)})
        return MentorRecord.model_validate(row) if row else None

    def get_employer_by_user(self, user_id: str) -> EmployerRecord | None:
        row = self._select_first('employers', {'select': '*', 'user_id': _eq(user_id)})
        return EmployerRecord.model_validate(row) if row else None

    def create_user(self, user_id: str, name: str, email: str, role: UserRole) -> UserRecord:
        rows = self._insert('users', {'id': user_id, 'name': name, 'email': email, 'role': role.value})
        return UserRecord.model_validate(rows[0])

    def create_role_record(self, role: UserRole, user_id: str, name: str) -> None:
        row = {'user_id': user_id}
        if role is UserRole.EMPLOYER:
            row['company_name'] = name
        self._insert(ROLE_RELATIONSHIPS[role], row)

    def list_skills(self) -> list[SkillRecord]:
        return self._list('skills', SkillRecord, 'name.asc')

    def get_skill(self, skill_id: str) -> SkillRecord | None:
        return self._get('skills', SkillRecord, skill_id)

    def get_skill_by_name(self, name: str) -> SkillRecord | None:
        row = self._select_first('skills', {'select': '*', 'name': _eq(name)})
        return SkillRecord.model_validate(row) if row else None

    def create_skill(self, name: str, category: str | None) -> SkillRecord:
        return self._create('skills', SkillRecord, {'name': name, 'category': category})

    def list_jobs(self, employer_id: str | None = None, status: str | None = None) -> list[JobRecord]:
        return self._list('jobs', JobRecord, 'created_at.desc', employer_id=employer_id, status=status)

    def get_job(self, job_id: str) -> JobRecord | None:
        return self._get('jobs', JobRecord, job_id)

    def create_job(self, values: dict) -> JobRecord:
        return self._create('jobs', JobRecord, values)

    def update_job(self, job_id: str, changes: dict) -> JobRecord | None:
        return self._update('jobs', JobRecord, job_id, changes)

    def delete_job(self, job_id: str) -> None:
        self._delete('job_applications', job_id=job_id)
        self._delete('jobs', id=job_id)

    def list_job_applications(
        self,
        job_id: str | None = None,
        student_id: str | None = None,
        status: str | None = None,
    ) -> list[JobApplicationRecord]:
        return self._list(
            'job_applications',
            JobApplicationRecord,
            'created_at.desc',
            job_id=job_id,
            student_id=student_id,
            status=status,
        )

    def get_job_application(self, application_id: str) -> JobApplicationRecord | None:
        return self._get('job_applications', JobApplicationRecord, application_id)

    def create_job_application(self, values: dict) -> JobApplicationRecord:
        return self._create('job_applications', JobApplicationRecord, values)

    def update_job_application(self, application_id: str, changes: dict) -> JobApplicationRecord | None:
        return self._update('job_applications', JobApplicationRecord, application_id, changes)

    def delete_job_application(self, application_id: str) -> None:
        self._delete('job_applications', id=application_id)

    def list_projects(self, employer_id: str | None = None, status: str | None = None) -> list[ProjectRecord]:
        return self._list('projects', ProjectRecord, 'created_at.desc', employer_id=employer_id, status=status)

    def get_project(self, project_id: str) -> ProjectRecord | None:
        return self._get('projects', ProjectRecord, project_id)

    def create_project(self, values: dict) -> ProjectRecord:
        return self._create('projects', ProjectRecord, values)

    def update_project(self, project_id: str, changes: dict) -> ProjectRecord | None:
        return self._update('projects', ProjectRecord, project_id, changes)

    def delete_project(self, project_id: str) -> None:
        self._delete('project_applicants', project_id=project_id)
        self._delete('projects', id=project_id)

    def list_project_applications(
        self,
        project_id: str | None = None,
        student_id: str | None = None,
        status: str | None = None,
    ) -> list[ProjectApplicationRecord]:
        return self._list(
            'project_applicants',
            ProjectApplicationRecord,
            'applied_at.desc',
            project_id=project_id,
            student_id=student_id,
            status=status,
        )

    def create_project_application(self, values: dict) -> ProjectApplicationRecord:
        return self._create('project_applicants', ProjectApplicationRecord, values)

    def list_mentor_expertise(self, mentor_id: str) -> list[ExpertiseRecord]:
        return self._list('mentor_expertise', ExpertiseRecord, 'created_at.asc', mentor_id=mentor_id)

    def create_expertise(self, values: dict) -> ExpertiseRecord:
        return self._create('mentor_expertise', ExpertiseRecord, values)

    def update_expertise(self, expertise_id: str, changes: dict) -> ExpertiseRecord | None:
        return self._update('mentor_expertise', ExpertiseRecord, expertise_id, changes)

    def delete_expertise(self, expertise_id: str) -> None:
        self._delete('mentor_expertise', id=expertise_id)

    def list_mentorship_sessions(
        self,
        mentor_id: str | None = None,
        student_id: str | None = None,
    ) -> list[MentorshipSessionRecord]:
        return self._list(
            'mentorship_sessions',
            MentorshipSessionRecord,
            'date.asc,time.asc',
            mentor_id=mentor_id,
            student_id=student_id,
        )

    def create_mentorship_session(self, values: dict) -> MentorshipSessionRecord:
        return self._create('mentorship_sessions', MentorshipSessionRecord, values)

    def update_mentorship_session(self, session_id: str, changes: dict) -> MentorshipSessionRecord | None:
        return self._update('mentorship_sessions', MentorshipSessionRecord, session_id, changes)

    def delete_mentorship_session(self, session_id: str) -> None:
        self._delete('mentorship_sessions', id=session_id)

    def list_employer_sessions(self, employer_id: str) -> list[EmployerSessionRecord]:
        return self._list('employer_sessions', EmployerSessionRecord, 'date.asc,time.asc', employer_id=employer_id)

    def create_employer_session(self, values: dict) -> EmployerSessionRecord:
        return self._create('employer_sessions', EmployerSessionRecord, values)

    def update_employer_session(self, session_id: str, changes: dict) -> EmployerSessionRecord | None:
        return self._update('employer_sessions', EmployerSessionRecord, session_id, changes)

    def delete_employer_session(self, session_id: str) -> None:
        self._delete('employer_sessions', id=session_id)

    def list_assessment_questions(self, employer_id: str) -> list[AssessmentQuestionRecord]:
        return self._list(
            'assessment_questions',
            AssessmentQuestionRecord,
            'created_at.desc',
            employer_id=employer_id,
        )

    def create_assessment_question(self, values: dict) -> AssessmentQuestionRecord:
        return self._create('assessment_questions', AssessmentQuestionRecord, values)

    def delete_assessment_question(self, question_id: str, employer_id: str) -> None:
        self._delete('assessment_questions', id=question_id, employer_id=employer_id)
