from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from industryhunt.auth.dependencies import get_session_user
from industryhunt.auth.guard import AuthState, ProtectedRoute
from industryhunt.dependencies import get_data_store
from industryhunt.models.roles import UserRole
from industryhunt.pages import components
from industryhunt.routes.auth_routes import MIN_PASSWORD_LENGTH
from industryhunt.schemas import UserRecord
from industryhunt.services.directory import list_directory
from industryhunt.services.store import DataStore

router = APIRouter(tags=['pages'])

DASHBOARD_TITLES = {
    UserRole.STUDENT: 'Student Dashboard',
    UserRole.MENTOR: 'Mentor Dashboard',
    UserRole.EMPLOYER: 'Employer Dashboard',
}


def render_protected(
    request: Request,
    user: UserRecord | None,
    children,
    allowed_roles: set[UserRole] | None = None,
) -> Response:
    redirects: list[str] = []
    guard = ProtectedRoute(navigate=redirects.append, allowed_roles=allowed_roles)
    response = guard.render(request, AuthState(user=user), children)
    if redirects:
        return RedirectResponse(url=redirects[0], status_code=status.HTTP_303_SEE_OTHER)
    return response


@router.get('/', response_class=HTMLResponse)
def landing_page(request: Request):
    return components.render_page(request, 'landing.html', 'Home')


@router.get('/auth/login', response_class=HTMLResponse)
def login_page(request: Request):
    return components.render_page(
        request,
        'login.html',
        'Log in',
        min_password_length=MIN_PASSWORD_LENGTH,
    )


@router.get('/dashboard')
def dashboard_page(request: Request, user: UserRecord | None = Depends(get_session_user)):
    def children(current_user: UserRecord) -> Response:
        return components.render_page(
            request,
            'dashboard.html',
            'Dashboard',
            user=current_user,
            header_title=DASHBOARD_TITLES[current_user.role],
        )

    return render_protected(request, user, children)


@router.get('/dashboard/students')
def students_page(
    request: Request,
    user: UserRecord | None = Depends(get_session_user),
    store: DataStore = Depends(get_data_store),
):
    def children(current_user: UserRecord) -> Response:
        return components.render_page(
            request,
            'students.html',
            'Students',
            user=current_user,
            header_title='Students',
            header_description='Students registered on the platform.',
            students=list_directory(store, UserRole.STUDENT),
        )

    return render_protected(
        request,
        user,
        children,
        allowed_roles={UserRole.MENTOR, UserRole.EMPLOYER},
    )
