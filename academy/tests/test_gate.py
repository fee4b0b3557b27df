import itertools

import pytest
from rest_framework.response import Response
from rest_framework.test import APIRequestFactory
from rest_framework.views import APIView

from academy.gate import ensure_owner, gate, get_bearer_token
from academy.exceptions import Forbidden
from academy.models import Lesson, Role
from academy.tokens import Claim, issue_token

factory = APIRequestFactory()
ROLES = [Role.ADMIN, Role.TEACHER, Role.STUDENT]


def make_view(*allowed):
    calls = []

    class EchoView(APIView):
        @gate(*allowed)
        def get(self, request):
            calls.append(request.claim)
            return Response({"user": request.claim.username, "role": request.claim.role})

    return EchoView.as_view(), calls


def call(view, token=None, header=None):
    extra = {}
    if header is not None:
        extra["HTTP_AUTHORIZATION"] = header
    elif token is not None:
        extra["HTTP_AUTHORIZATION"] = f"Bearer {token}"
    return view(factory.get("/echo", **extra))


def test_bearer_token_parsing():
    assert get_bearer_token(factory.get("/", HTTP_AUTHORIZATION="Bearer abc")) == "abc"
    assert get_bearer_token(factory.get("/", HTTP_AUTHORIZATION="bearer abc")) == "abc"
    assert get_bearer_token(factory.get("/", HTTP_AUTHORIZATION="Token abc")) is None
    assert get_bearer_token(factory.get("/", HTTP_AUTHORIZATION="Bearer")) is None
    assert get_bearer_token(factory.get("/")) is None


def test_missing_token_is_unauthorized_and_handler_not_run():
    view, calls = make_view()
    response = call(view)
    assert response.status_code == 401
    assert response.data == {"error": "Unauthorized"}
    assert calls == []


def test_invalid_token_is_unauthorized():
    view, calls = make_view()
    response = call(view, token="forged")
    assert response.status_code == 401
    assert response.data == {"error": "Invalid token"}
    assert calls == []


def test_expired_token_is_unauthorized():
    view, calls = make_view()
    response = call(view, token=issue_token(1, "ali1", "student", now=0))
    assert response.status_code == 401
    assert calls == []


@pytest.mark.parametrize(
    "allowed,role",
    [
        (set(combo), role)
        for size in range(len(ROLES) + 1)
        for combo in itertools.combinations(ROLES, size)
        for role in ROLES
    ],
)
def test_role_membership_decides_access(allowed, role):
    view, calls = make_view(*allowed)
    response = call(view, token=issue_token(3, "someone", role))
    if not allowed or role in allowed:
        assert response.status_code == 200
        assert response.data == {"user": "someone", "role": role}
        assert len(calls) == 1
    else:
        assert response.status_code == 403
        assert response.data == {"error": "Forbidden"}
        assert calls == []


def _claim(user_id, role):
    return Claim(user_id=user_id, username="u", role=role, exp=0)


def test_teacher_must_own_lesson():
    lesson = Lesson(teacher_id=5)
    ensure_owner(lesson, _claim(5, Role.TEACHER))
    with pytest.raises(Forbidden):
        ensure_owner(lesson, _claim(6, Role.TEACHER))
    with pytest.raises(Forbidden):
        ensure_owner(Lesson(teacher_id=None), _claim(6, Role.TEACHER))


def test_admin_bypasses_ownership():
    ensure_owner(Lesson(teacher_id=5), _claim(1, Role.ADMIN))
