"""Bearer-token authorization for API views.

@gate()                        - any valid token
@gate(Role.ADMIN)              - admins only
@gate(Role.ADMIN, Role.TEACHER) - admins and teachers
"""
from functools import wraps

from .exceptions import Forbidden, Unauthorized
from .models import AppUser, Role
from .tokens import Claim, InvalidToken, verify_token


def get_bearer_token(request) -> str | None:
    auth_header = request.headers.get("Authorization") or request.META.get("HTTP_AUTHORIZATION")
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def authorize(request, allowed_roles=()) -> Claim:
    token = get_bearer_token(request)
    if not token:
        raise Unauthorized()
    try:
        claim = verify_token(token)
    except InvalidToken:
        raise Unauthorized("Invalid token")
    if allowed_roles and claim.role not in allowed_roles:
        raise Forbidden()
    return claim


def gate(*allowed_roles):
    """Decorate an APIView method so it only runs for an authorized caller.

    The verified claim is available to the handler as ``request.claim``.
    """
    roles = frozenset(str(r) for r in allowed_roles)

    def decorator(handler):
        @wraps(handler)
        def wrapper(view, request, *args, **kwargs):
            request.claim = authorize(request, roles)
            return handler(view, request, *args, **kwargs)

        return wrapper

    return decorator


def ensure_owner(lesson, claim: Claim) -> None:
    if claim.role == Role.TEACHER and lesson.teacher_id != claim.user_id:
        raise Forbidden()


def current_user(claim: Claim):
    """Load the account behind a claim; tokens outlive deleted users."""
    user = AppUser.objects.filter(id=claim.user_id).first()
    if user is None:
        raise Unauthorized()
    return user
