# academy/services.py
from __future__ import annotations

import logging

from django.contrib.auth.hashers import check_password, make_password
from django.db import IntegrityError, transaction
from django.utils import timezone

from .exceptions import DuplicateSlug, DuplicateUser, NotFound
from .models import (
    AppUser,
    Blog,
    Category,
    ContactMessage,
    Lesson,
    Role,
    StudentProgress,
)

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("email", "first_name", "phone", "teams_id", "country", "city", "program", "preferred_days")


def create_user(username: str, password: str, role: str = Role.STUDENT, **profile) -> AppUser:
    """Create a user with a salted password hash; usernames are unique."""
    if AppUser.objects.filter(username=username).exists():
        raise DuplicateUser()
    fields = {k: v for k, v in profile.items() if k in PROFILE_FIELDS and v not in (None, "")}
    try:
        with transaction.atomic():
            user = AppUser.objects.create(
                username=username,
                password_hash=make_password(password),
                role=role,
                **fields,
            )
    except IntegrityError:
        # Lost a race with a concurrent registration
        raise DuplicateUser()
    logger.info("Created %s user %s", role, username)
    return user


def authenticate(username: str, password: str) -> AppUser | None:
    try:
        user = AppUser.objects.get(username=username)
    except AppUser.DoesNotExist:
        return None
    if not check_password(password, user.password_hash):
        return None
    return user


def delete_user(user_id: int) -> None:
    deleted, _ = AppUser.objects.filter(id=user_id).delete()
    if not deleted:
        raise NotFound("User not found")
    logger.info("Deleted user %s", user_id)


def _slug_taken(obj) -> bool:
    return type(obj).objects.filter(slug=obj.slug).exclude(pk=obj.pk).exists()


def _save_with_unique_slug(obj):
    if _slug_taken(obj):
        raise DuplicateSlug()
    try:
        with transaction.atomic():
            obj.save()
    except IntegrityError:
        # Only a concurrent writer claiming the slug is a duplicate
        if _slug_taken(obj):
            raise DuplicateSlug()
        raise
    return obj


def save_lesson(lesson: Lesson) -> Lesson:
    return _save_with_unique_slug(lesson)


def save_blog(blog: Blog) -> Blog:
    return _save_with_unique_slug(blog)


def upsert_progress(student_id: int, lesson_id: int, completed: bool) -> StudentProgress:
    """Insert or update the single progress row for (student, lesson)."""
    if not Lesson.objects.filter(id=lesson_id).exists():
        raise NotFound("Lesson not found")
    with transaction.atomic():
        progress, _ = StudentProgress.objects.update_or_create(
            student_id=student_id,
            lesson_id=lesson_id,
            defaults={"completed": bool(completed), "last_accessed": timezone.now()},
        )
    return progress


def dashboard_stats() -> dict:
    return {
        "totalLessons": Lesson.objects.count(),
        "totalCategories": Category.objects.count(),
        "unreadMessages": ContactMessage.objects.filter(is_read=False).count(),
        "totalTeachers": AppUser.objects.filter(role=Role.TEACHER).count(),
        "totalStudents": AppUser.objects.filter(role=Role.STUDENT).count(),
    }
