from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from industryhunt.auth.dependencies import get_session_user
from industryhunt.core.errors import NotAuthenticatedError, ValidationError, error_response
from industryhunt.dependencies import get_data_store
from industryhunt.routes.helpers import RequiredText, parse_body, read_json_body, server_error
from industryhunt.schemas import UserRecord
from industryhunt.services import assessments
from industryhunt.services.store import DataStore

router = APIRouter(tags=['assessments'])


class QuestionBody(BaseModel):
    job_id: str | None = None
    question: RequiredText
    options: list[str]
    correct_option: int


def require_user(user: UserRecord | None) -> UserRecord:
    if user is None:
        raise NotAuthenticatedError('Not authenticated')
    return user


@router.get('')
def list_questions(
    employer_id: str | None = Query(None, alias='employerId'),
    store: DataStore = Depends(get_data_store),
):
    try:
        if not employer_id:
            raise ValidationError('Missing employerId')
        questions = assessments.list_questions(store, employer_id)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to fetch questions')

    return {'questions': [question.model_dump(mode='json') for question in questions]}


@router.post('')
async def create_question(
    request: Request,
    user: UserRecord | None = Depends(get_session_user),
    store: DataStore = Depends(get_data_store),
):
    try:
        user = require_user(user)
        payload = await read_json_body(request)
        body = parse_body(QuestionBody, payload, 'Missing required fields')
        question = await run_in_threadpool(assessments.create_question, store, user.id, body.model_dump())
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to create question')

    return {'question': question.model_dump(mode='json')}


@router.delete('')
async def delete_question(
    request: Request,
    user: UserRecord | None = Depends(get_session_user),
    store: DataStore = Depends(get_data_store),
):
    try:
        user = require_user(user)
        payload = await read_json_body(request)
        question_id = payload.get('id')
        if not question_id or not isinstance(question_id, str):
            raise ValidationError('Missing id')
        await run_in_threadpool(assessments.delete_question, store, user.id, question_id)
    except ValidationError as exc:
        return error_response(exc)
    except Exception:
        return server_error('Failed to delete question')

    return {'success': True}
