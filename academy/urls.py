from django.urls import path
from .views import (
    AdminBlogDetailView,
    AdminBlogListView,
    AdminMessageListView,
    AdminMessageReadView,
    AdminSpecializedCourseDetailView,
    AdminSpecializedCourseListView,
    AdminStatsView,
    AdminUserDetailView,
    AdminUserListView,
    AIAssistantView,
    BlogListView,
    CategoryListView,
    ContactView,
    LessonDetailView,
    LessonListView,
    LessonManagementDetailView,
    LessonManagementListView,
    LoginView,
    MeView,
    RegisterView,
    SpecializedCourseListView,
    StudentProgressDetailView,
    StudentProgressListView,
)

urlpatterns = [
    # Public
    path("categories", CategoryListView.as_view()),
    path("lessons", LessonListView.as_view()),
    path("lessons/<slug:slug>", LessonDetailView.as_view()),
    path("blogs", BlogListView.as_view()),
    path("specialized-courses", SpecializedCourseListView.as_view()),
    path("contact", ContactView.as_view()),
    path("ai-assistant", AIAssistantView.as_view()),
    # Auth
    path("auth/register", RegisterView.as_view()),
    path("auth/login", LoginView.as_view()),
    path("auth/me", MeView.as_view()),
    # Admin
    path("admin/stats", AdminStatsView.as_view()),
    path("admin/users", AdminUserListView.as_view()),
    path("admin/users/<int:user_id>", AdminUserDetailView.as_view()),
    path("admin/messages", AdminMessageListView.as_view()),
    path("admin/messages/<int:message_id>/read", AdminMessageReadView.as_view()),
    path("admin/blogs", AdminBlogListView.as_view()),
    path("admin/blogs/<int:blog_id>", AdminBlogDetailView.as_view()),
    path("admin/specialized-courses", AdminSpecializedCourseListView.as_view()),
    path("admin/specialized-courses/<int:course_id>", AdminSpecializedCourseDetailView.as_view()),
    # Lesson management
    path("lessons-management", LessonManagementListView.as_view()),
    path("lessons-management/<int:lesson_id>", LessonManagementDetailView.as_view()),
    # Student
    path("student/progress", StudentProgressListView.as_view()),
    path("student/progress/<int:lesson_id>", StudentProgressDetailView.as_view()),
]
