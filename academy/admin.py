from django.contrib import admin
from .models import (
    AICacheEntry,
    AppUser,
    Blog,
    Category,
    ContactMessage,
    Lesson,
    SpecializedCourse,
    StudentProgress,
)


@admin.register(AppUser)
class AppUserAdmin(admin.ModelAdmin):
    list_display = ("username", "role", "email", "created_at", "id")
    list_filter = ("role", "created_at")
    search_fields = ("username", "email")
    ordering = ("-created_at",)
    exclude = ("password_hash",)


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Lesson)
class LessonAdmin(admin.ModelAdmin):
    list_display = ("title", "slug", "category", "teacher", "status", "created_at")
    list_filter = ("status", "category")
    search_fields = ("title", "slug", "teacher__username")
    ordering = ("-created_at",)


@admin.register(Blog)
class BlogAdmin(admin.ModelAdmin):
    list_display = ("title", "slug", "category", "created_at")
    search_fields = ("title", "slug")
    ordering = ("-created_at",)


@admin.register(SpecializedCourse)
class SpecializedCourseAdmin(admin.ModelAdmin):
    list_display = ("title", "icon_name", "created_at")


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "is_read", "created_at")
    list_filter = ("is_read", "created_at")
    search_fields = ("name", "email", "message")
    ordering = ("-created_at",)


@admin.register(StudentProgress)
class StudentProgressAdmin(admin.ModelAdmin):
    list_display = ("student", "lesson", "completed", "last_accessed")
    list_filter = ("completed",)


@admin.register(AICacheEntry)
class AICacheEntryAdmin(admin.ModelAdmin):
    list_display = ("id", "user_role", "question", "created_at")
    list_filter = ("user_role", "created_at")
    search_fields = ("question", "response")
    ordering = ("-created_at",)
