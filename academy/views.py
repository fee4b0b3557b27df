import logging

from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .assistant import assistant
from .exceptions import NotFound, Unauthorized, ValidationError
from .gate import current_user, ensure_owner, gate
from .models import (
    AppUser,
    Blog,
    Category,
    ContactMessage,
    Lesson,
    Role,
    SpecializedCourse,
    StudentProgress,
)
from .serializers import (
    AdminUserCreateSerializer,
    AppUserSerializer,
    AssistantQuestionSerializer,
    BlogSerializer,
    CategorySerializer,
    ContactMessageSerializer,
    LessonSerializer,
    LessonWriteSerializer,
    LoginSerializer,
    ProgressUpdateSerializer,
    RegisterSerializer,
    SpecializedCourseSerializer,
    StudentProgressSerializer,
)
from .tokens import issue_token
from .uploads import save_upload, validate_upload

logger = logging.getLogger(__name__)

SUCCESS = {"success": True}

MISSING_CODES = {"required", "blank", "null"}


def _lessons_queryset():
    return Lesson.objects.select_related("category", "teacher")


def _get_or_404(qs, message: str, **lookup):
    try:
        return qs.get(**lookup)
    except qs.model.DoesNotExist:
        raise NotFound(message)


def _validated(serializer, missing_message: str) -> dict:
    """Absent fields get ``missing_message``; malformed ones keep their field errors."""
    if serializer.is_valid():
        return serializer.validated_data
    codes = {
        getattr(error, "code", None)
        for errors in serializer.errors.values()
        for error in errors
    }
    if codes & MISSING_CODES:
        raise ValidationError(missing_message)
    raise DRFValidationError(serializer.errors)


# --- Public catalog ---

class CategoryListView(APIView):
    def get(self, request):
        return Response(CategorySerializer(Category.objects.all(), many=True).data)


class LessonListView(APIView):
    def get(self, request):
        qs = _lessons_queryset().filter(status=Lesson.Status.PUBLISHED)
        category = request.query_params.get("category")
        if category:
            qs = qs.filter(category__slug=category)
        return Response(LessonSerializer(qs, many=True).data)


class LessonDetailView(APIView):
    def get(self, request, slug: str):
        lesson = _get_or_404(_lessons_queryset(), "Lesson not found", slug=slug)
        return Response(LessonSerializer(lesson).data)


class BlogListView(APIView):
    def get(self, request):
        return Response(BlogSerializer(Blog.objects.all(), many=True).data)


class SpecializedCourseListView(APIView):
    def get(self, request):
        return Response(SpecializedCourseSerializer(SpecializedCourse.objects.all(), many=True).data)


class ContactView(APIView):
    def post(self, request):
        serializer = ContactMessageSerializer(data=request.data)
        _validated(serializer, "Required fields missing")
        serializer.save()
        return Response(SUCCESS)


class AIAssistantView(APIView):
    def post(self, request):
        serializer = AssistantQuestionSerializer(data=request.data)
        if not serializer.is_valid():
            raise ValidationError("Question is required")
        data = serializer.validated_data
        text = assistant.answer(data["question"], data.get("role"))
        return Response({"response": text})


# --- Auth ---

class RegisterView(APIView):
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        data = dict(_validated(serializer, "Username and password required"))
        username = data.pop("username")
        password = data.pop("password")
        # Self-registration always yields a student
        services.create_user(username, password, role=Role.STUDENT, **data)
        return Response(SUCCESS)


class LoginView(APIView):
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            raise Unauthorized("Invalid credentials")
        user = services.authenticate(
            serializer.validated_data["username"], serializer.validated_data["password"]
        )
        if user is None:
            logger.info("Failed login for %s", serializer.validated_data["username"])
            raise Unauthorized("Invalid credentials")
        token = issue_token(user.id, user.username, user.role)
        return Response({"token": token, "username": user.username, "role": user.role})


class MeView(APIView):
    @gate()
    def get(self, request):
        return Response(AppUserSerializer(current_user(request.claim)).data)


# --- Admin ---

class AdminStatsView(APIView):
    @gate(Role.ADMIN)
    def get(self, request):
        return Response(services.dashboard_stats())


class AdminUserListView(APIView):
    @gate(Role.ADMIN)
    def get(self, request):
        qs = AppUser.objects.all()
        role = request.query_params.get("role")
        if role:
            qs = qs.filter(role=role)
        return Response(AppUserSerializer(qs, many=True).data)

    @gate(Role.ADMIN)
    def post(self, request):
        serializer = AdminUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        services.create_user(data["username"], data["password"], role=data["role"], email=data.get("email"))
        return Response(SUCCESS)


class AdminUserDetailView(APIView):
    @gate(Role.ADMIN)
    def delete(self, request, user_id: int):
        services.delete_user(user_id)
        return Response(SUCCESS)


class AdminMessageListView(APIView):
    @gate(Role.ADMIN)
    def get(self, request):
        return Response(ContactMessageSerializer(ContactMessage.objects.all(), many=True).data)


class AdminMessageReadView(APIView):
    @gate(Role.ADMIN)
    def patch(self, request, message_id: int):
        updated = ContactMessage.objects.filter(id=message_id).update(is_read=True)
        if not updated:
            raise NotFound("Message not found")
        return Response(SUCCESS)


# --- Lesson management (admin + teacher) ---

def _uploaded_media(request, fallbacks: dict) -> dict:
    """Store image/audio uploads; fields without a file keep their fallback."""
    files = {field: request.FILES.get(field) for field in ("image", "audio")}
    for upload in files.values():
        if upload is not None:
            validate_upload(upload)
    return {
        "featured_image": save_upload(files["image"]) if files["image"] else fallbacks.get("featured_image"),
        "audio_file": save_upload(files["audio"]) if files["audio"] else fallbacks.get("audio_file"),
    }


def _apply_lesson_fields(lesson: Lesson, request, data: dict) -> Lesson:
    claim = request.claim
    lesson.title = data["title"]
    lesson.slug = data["slug"]
    lesson.short_description = data["short_description"]
    lesson.full_content = data["full_content"]
    lesson.category = data["category"]
    lesson.video_link = data["video_link"]
    lesson.status = data["status"]
    if claim.role == Role.ADMIN:
        lesson.teacher = data["teacher"]
    else:
        lesson.teacher = current_user(claim)

    media = _uploaded_media(request, data)
    lesson.featured_image = media["featured_image"]
    lesson.audio_file = media["audio_file"]
    return lesson


class LessonManagementListView(APIView):
    @gate(Role.ADMIN, Role.TEACHER)
    def get(self, request):
        qs = _lessons_queryset()
        if request.claim.role == Role.TEACHER:
            qs = qs.filter(teacher_id=request.claim.user_id)
        return Response(LessonSerializer(qs, many=True).data)

    @gate(Role.ADMIN, Role.TEACHER)
    def post(self, request):
        serializer = LessonWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        lesson = _apply_lesson_fields(Lesson(), request, serializer.validated_data)
        services.save_lesson(lesson)
        logger.info("Lesson %s created by %s", lesson.slug, request.claim.username)
        return Response({"success": True, "id": lesson.id})


class LessonManagementDetailView(APIView):
    @gate(Role.ADMIN, Role.TEACHER)
    def put(self, request, lesson_id: int):
        lesson = _get_or_404(Lesson.objects, "Lesson not found", id=lesson_id)
        ensure_owner(lesson, request.claim)
        serializer = LessonWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.save_lesson(_apply_lesson_fields(lesson, request, serializer.validated_data))
        return Response(SUCCESS)

    @gate(Role.ADMIN, Role.TEACHER)
    def delete(self, request, lesson_id: int):
        lesson = _get_or_404(Lesson.objects, "Lesson not found", id=lesson_id)
        ensure_owner(lesson, request.claim)
        lesson.delete()
        logger.info("Lesson %s deleted by %s", lesson_id, request.claim.username)
        return Response(SUCCESS)


# --- Student progress ---

class StudentProgressListView(APIView):
    @gate(Role.STUDENT)
    def get(self, request):
        qs = StudentProgress.objects.select_related("lesson").filter(student_id=request.claim.user_id)
        return Response(StudentProgressSerializer(qs.order_by("-last_accessed"), many=True).data)

    @gate(Role.STUDENT)
    def post(self, request):
        serializer = ProgressUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        lesson_id = serializer.validated_data.get("lesson_id")
        if lesson_id is None:
            raise ValidationError("lesson_id is required")
        student = current_user(request.claim)
        services.upsert_progress(student.id, lesson_id, serializer.validated_data["completed"])
        return Response(SUCCESS)


class StudentProgressDetailView(APIView):
    @gate(Role.STUDENT)
    def post(self, request, lesson_id: int):
        serializer = ProgressUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        student = current_user(request.claim)
        services.upsert_progress(student.id, lesson_id, serializer.validated_data["completed"])
        return Response(SUCCESS)


# --- Blogs (admin writes) ---

def _blog_image(request, current=None):
    upload = request.FILES.get("image")
    if upload is not None:
        return save_upload(upload)
    value = request.data.get("image")
    return value if isinstance(value, str) and value else current


class AdminBlogListView(APIView):
    @gate(Role.ADMIN)
    def get(self, request):
        return Response(BlogSerializer(Blog.objects.all(), many=True).data)

    @gate(Role.ADMIN)
    def post(self, request):
        serializer = BlogSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        blog = Blog(**serializer.validated_data)
        blog.image = _blog_image(request)
        services.save_blog(blog)
        return Response({"success": True, "id": blog.id})


class AdminBlogDetailView(APIView):
    @gate(Role.ADMIN)
    def put(self, request, blog_id: int):
        blog = _get_or_404(Blog.objects, "Blog not found", id=blog_id)
        serializer = BlogSerializer(blog, data=request.data)
        serializer.is_valid(raise_exception=True)
        for attr, value in serializer.validated_data.items():
            setattr(blog, attr, value)
        blog.image = _blog_image(request, current=blog.image)
        services.save_blog(blog)
        return Response(SUCCESS)

    @gate(Role.ADMIN)
    def delete(self, request, blog_id: int):
        deleted, _ = Blog.objects.filter(id=blog_id).delete()
        if not deleted:
            raise NotFound("Blog not found")
        return Response(SUCCESS)


# --- Specialized courses (admin writes) ---

class AdminSpecializedCourseListView(APIView):
    @gate(Role.ADMIN)
    def get(self, request):
        return Response(SpecializedCourseSerializer(SpecializedCourse.objects.all(), many=True).data)

    @gate(Role.ADMIN)
    def post(self, request):
        serializer = SpecializedCourseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        course = serializer.save()
        return Response({"success": True, "id": course.id})


class AdminSpecializedCourseDetailView(APIView):
    @gate(Role.ADMIN)
    def put(self, request, course_id: int):
        course = _get_or_404(SpecializedCourse.objects, "Course not found", id=course_id)
        serializer = SpecializedCourseSerializer(course, data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(SUCCESS)

    @gate(Role.ADMIN)
    def delete(self, request, course_id: int):
        deleted, _ = SpecializedCourse.objects.filter(id=course_id).delete()
        if not deleted:
            raise NotFound("Course not found")
        return Response(SUCCESS)
