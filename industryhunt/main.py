import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from industryhunt.core import config
from industryhunt.core.logging import configure_logging
from industryhunt.database import create_tables
from industryhunt.dependencies import reset_clients
from industryhunt.routes import (
    assessment_routes,
    auth_routes,
    dashboard_routes,
    employer_routes,
    job_routes,
    mentor_routes,
    page_routes,
    project_routes,
    session_routes,
    student_routes,
    user_routes,
)

logger = logging.getLogger(__name__)


def initialize_database() -> None:
    if config.DATA_STORE != 'sql':
        return
    try:
        create_tables()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and Postgres credentials.')


def create_app() -> FastAPI:
    configure_logging()
    config.validate_runtime_config()

    app = FastAPI(title='IndustryHunt Dashboard API', version='0.1.0')

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.on_event('startup')
    def on_startup() -> None:
        initialize_database()

    @app.on_event('shutdown')
    def on_shutdown() -> None:
        reset_clients()

    @app.get('/health')
    def health():
        return {'status': 'IndustryHunt API Running'}

    app.include_router(auth_routes.router, prefix='/api/auth')
    app.include_router(dashboard_routes.router, prefix='/api/dashboard')
    app.include_router(employer_routes.router, prefix='/api/dashboard/employers')
    app.include_router(student_routes.router, prefix='/api/dashboard/students')
    app.include_router(mentor_routes.router, prefix='/api/dashboard/mentors')
    app.include_router(project_routes.router, prefix='/api/dashboard/projects')
    app.include_router(session_routes.router, prefix='/api/dashboard/sessions')
    app.include_router(job_routes.router, prefix='/api/jobs')
    app.include_router(assessment_routes.router, prefix='/api/assessments')
    app.include_router(user_routes.router, prefix='/api')
    app.include_router(page_routes.router)
    return app


app = create_app()
