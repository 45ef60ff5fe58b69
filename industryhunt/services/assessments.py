from industryhunt.schemas import AssessmentQuestionRecord
from industryhunt.services.store import DataStore


def list_questions(store: DataStore, employer_id: str) -> list[AssessmentQuestionRecord]:
    return store.list_assessment_questions(employer_id)


def create_question(store: DataStore, employer_user_id: str, values: dict) -> AssessmentQuestionRecord:
    return store.create_assessment_question({**values, 'employer_id': employer_user_id})


def delete_question(store: DataStore, employer_user_id: str, question_id: str) -> None:
    # Scoped to the owner: someone else's question id deletes nothing.
    store.delete_assessment_question(question_id, employer_user_id)
