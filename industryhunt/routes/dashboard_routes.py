from fastapi import APIRouter, Depends, Query

from industryhunt.core.errors import ApiError, ValidationError, error_response, unexpected_error_response
from industryhunt.dependencies import get_data_store
from industryhunt.models.roles import UserRole
from industryhunt.routes.helpers import require_param
from industryhunt.services import dashboard
from industryhunt.services.store import DataStore

router = APIRouter(tags=['dashboard'])


@router.get('/activities')
def user_activities(
    user_id: str | None = Query(None, alias='userId'),
    store: DataStore = Depends(get_data_store),
):
    try:
        user_id = require_param(user_id, 'userId')
        activities = dashboard.get_recent_activities(store, user_id)
    except ApiError as exc:
        return error_response(exc)
    except Exception as exc:
        return unexpected_error_response(exc, 'Failed to fetch user activities')

    return {'activities': [activity.model_dump(mode='json') for activity in activities]}


@router.get('/skills')
def student_skills(
    student_id: str | None = Query(None, alias='studentId'),
    store: DataStore = Depends(get_data_store),
):
    try:
        student_id = require_param(student_id, 'studentId')
        skills = dashboard.get_student_skills(store, student_id)
    except ApiError as exc:
        return error_response(exc)
    except Exception as exc:
        return unexpected_error_response(exc, 'Failed to fetch student skills')

    return {'skills': [skill.model_dump() for skill in skills]}


@router.get('/stats')
def dashboard_stats(
    user_id: str | None = Query(None, alias='userId'),
    user_role: str | None = Query(None, alias='userRole'),
    store: DataStore = Depends(get_data_store),
):
    try:
        if not (user_id and user_id.strip()) or not (user_role and user_role.strip()):
            raise ValidationError('Missing required parameters: userId and userRole')
        try:
            role = UserRole.parse(user_role)
        except ValueError as exc:
            raise ValidationError('Invalid parameter: userRole') from exc

        stats = dashboard.get_dashboard_stats(store, user_id.strip(), role)
    except ApiError as exc:
        return error_response(exc)
    except Exception as exc:
        return unexpected_error_response(exc, 'Failed to fetch dashboard stats')

    return stats.model_dump()
