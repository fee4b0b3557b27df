import pytest
from rest_framework.test import APIClient

from academy import services
from academy.models import Category, Lesson, Role
from academy.tokens import issue_token


@pytest.fixture(autouse=True)
def uploads_dir(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "uploads"
    return settings.MEDIA_ROOT


@pytest.fixture
def api_client():
    return APIClient()


def bearer(user) -> str:
    return f"Bearer {issue_token(user.id, user.username, user.role)}"


@pytest.fixture
def as_user(api_client):
    """Return the API client authenticated as the given user."""
    def _as(user):
        api_client.credentials(HTTP_AUTHORIZATION=bearer(user))
        return api_client
    return _as


@pytest.fixture
def make_user(db):
    def _make(username, role=Role.STUDENT, password="pw123"):
        return services.create_user(username, password, role=role)
    return _make


@pytest.fixture
def admin(make_user):
    return make_user("admin", Role.ADMIN)


@pytest.fixture
def teacher(make_user):
    return make_user("teacher1", Role.TEACHER)


@pytest.fixture
def student(make_user):
    return make_user("student1", Role.STUDENT)


@pytest.fixture
def tajweed(db):
    # Seeded by the 0002 data migration
    return Category.objects.get(slug="tajweed")


@pytest.fixture
def make_lesson(tajweed):
    def _make(slug, teacher=None, status=Lesson.Status.PUBLISHED, category=None):
        return Lesson.objects.create(
            title=slug.replace("-", " ").title(),
            slug=slug,
            category=category or tajweed,
            teacher=teacher,
            status=status,
        )
    return _make
