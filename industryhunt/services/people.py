"""Display names for the student, mentor or employer behind a role-record id."""

from industryhunt.schemas import PersonRef, UserRecord
from industryhunt.services.store import DataStore


def student_user(store: DataStore, student_id: str) -> UserRecord | None:
    student = store.get_student(student_id)
    return store.get_user(student.user_id) if student else None


def mentor_user(store: DataStore, mentor_id: str) -> UserRecord | None:
    mentor = store.get_mentor(mentor_id)
    return store.get_user(mentor.user_id) if mentor else None


def person_ref(record_id: str, user: UserRecord | None, default_name: str) -> PersonRef:
    return PersonRef(
        id=record_id,
        name=(user.name if user else '') or default_name,
        avatar_url=user.avatar_url if user else None,
    )


def company_names(store: DataStore, employer_ids) -> dict[str, str | None]:
    names = {}
    for employer_id in set(employer_ids):
        employer = store.get_employer(employer_id)
        names[employer_id] = employer.company_name if employer else None
    return names
