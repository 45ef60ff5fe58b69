from fastapi import APIRouter, Depends, Query

from industryhunt.dependencies import get_data_store
from industryhunt.routes.helpers import server_error
from industryhunt.services import projects
from industryhunt.services.store import DataStore

router = APIRouter(tags=['projects'])


@router.get('/marketplace')
def marketplace(
    search: str | None = Query(None),
    category: str | None = Query(None),
    skill: str | None = Query(None),
    paid: str | None = Query(None),
    student_id: str | None = Query(None, alias='studentId'),
    store: DataStore = Depends(get_data_store),
):
    try:
        listed = projects.list_marketplace(
            store,
            search=search,
            category=category,
            skill=skill,
            paid=paid,
            student_id=student_id,
        )
    except Exception:
        return server_error('Failed to fetch projects')

    return {'projects': [project.model_dump(mode='json') for project in listed]}
