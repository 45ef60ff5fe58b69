"""Access gate for protected pages.

The gate looks at the current auth state and decides between four outcomes:
keep waiting (``LOADING``), send the visitor to the login page
(``UNAUTHENTICATED``), send them back to the dashboard (``FORBIDDEN``), or
render the protected content (``AUTHORIZED``).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from fastapi import Request
from fastapi.responses import Response

from industryhunt.models.roles import UserRole
from industryhunt.pages import components
from industryhunt.schemas import UserRecord

LOGIN_PATH = '/auth/login'
DASHBOARD_PATH = '/dashboard'


class GuardState(str, Enum):
    LOADING = 'loading'
    UNAUTHENTICATED = 'unauthenticated'
    FORBIDDEN = 'forbidden'
    AUTHORIZED = 'authorized'


@dataclass(frozen=True)
class AuthState:
    user: UserRecord | None = None
    loading: bool = False


def resolve_guard_state(
    auth_state: AuthState,
    allowed_roles: Iterable[UserRole] | None = None,
) -> GuardState:
    if auth_state.loading:
        return GuardState.LOADING
    if auth_state.user is None:
        return GuardState.UNAUTHENTICATED
    if allowed_roles is not None and auth_state.user.role not in set(allowed_roles):
        return GuardState.FORBIDDEN
    return GuardState.AUTHORIZED


REDIRECTS = {
    GuardState.UNAUTHENTICATED: LOGIN_PATH,
    GuardState.FORBIDDEN: DASHBOARD_PATH,
}


class ProtectedRoute:
    """Render ``children`` only for a signed-in user holding an allowed role.

    ``navigate`` is called with the redirect target when the visitor must go
    elsewhere. Until the state is ``AUTHORIZED`` only the spinner page renders.
    """

    def __init__(
        self,
        navigate: Callable[[str], None],
        allowed_roles: Iterable[UserRole] | None = None,
    ):
        self.navigate = navigate
        self.allowed_roles = frozenset(allowed_roles) if allowed_roles is not None else None

    def render(
        self,
        request: Request,
        auth_state: AuthState,
        children: Callable[[UserRecord], Response],
    ) -> Response:
        state = resolve_guard_state(auth_state, self.allowed_roles)
        target = REDIRECTS.get(state)
        if target is not None:
            self.navigate(target)
        if state is not GuardState.AUTHORIZED:
            return components.render_spinner(request)
        return children(auth_state.user)
