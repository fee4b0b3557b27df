import json

from rest_framework import serializers

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


class AppUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = AppUser
        fields = ["id", "username", "email", "role", "created_at"]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    firstName = serializers.CharField(source="first_name", required=False, allow_blank=True, allow_null=True)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    teamsId = serializers.CharField(source="teams_id", required=False, allow_blank=True, allow_null=True)
    country = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    city = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    program = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    preferredDays = serializers.CharField(source="preferred_days", required=False, allow_blank=True, allow_null=True)


class AdminUserCreateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    role = serializers.ChoiceField(choices=Role.choices)


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True)


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description"]


class LessonSerializer(serializers.ModelSerializer):
    category_id = serializers.IntegerField(read_only=True)
    teacher_id = serializers.IntegerField(read_only=True, allow_null=True)
    category_name = serializers.CharField(source="category.name", read_only=True)
    teacher_name = serializers.CharField(source="teacher.username", read_only=True, default=None)

    class Meta:
        model = Lesson
        fields = [
            "id",
            "title",
            "slug",
            "short_description",
            "full_content",
            "featured_image",
            "audio_file",
            "video_link",
            "category_id",
            "category_name",
            "teacher_id",
            "teacher_name",
            "status",
            "created_at",
            "updated_at",
        ]


class LessonWriteSerializer(serializers.Serializer):
    """Multipart/JSON body for creating or replacing a lesson."""
    title = serializers.CharField(max_length=255)
    slug = serializers.SlugField(max_length=255)
    short_description = serializers.CharField(required=False, allow_blank=True, default="")
    full_content = serializers.CharField(required=False, allow_blank=True, default="")
    category_id = serializers.PrimaryKeyRelatedField(source="category", queryset=Category.objects.all())
    video_link = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    featured_image = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    audio_file = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    status = serializers.ChoiceField(choices=Lesson.Status.choices, default=Lesson.Status.PUBLISHED)
    teacher_id = serializers.PrimaryKeyRelatedField(
        source="teacher",
        queryset=AppUser.objects.filter(role=Role.TEACHER),
        required=False,
        allow_null=True,
        default=None,
    )


class BlogSerializer(serializers.ModelSerializer):
    class Meta:
        model = Blog
        fields = ["id", "title", "slug", "content", "category", "image", "created_at"]
        read_only_fields = ["id", "image", "created_at"]
        # Slug clashes are reported as DuplicateSlug by services.save_blog
        extra_kwargs = {"slug": {"validators": []}}


class SpecializedCourseSerializer(serializers.ModelSerializer):
    features = serializers.ListField(child=serializers.CharField(), required=False)

    class Meta:
        model = SpecializedCourse
        fields = ["id", "title", "description", "features", "icon_name", "color_class", "created_at"]
        read_only_fields = ["id", "created_at"]

    def to_internal_value(self, data):
        # Older clients send features as a JSON-encoded string
        features = data.get("features") if hasattr(data, "get") else None
        if isinstance(features, str):
            try:
                decoded = json.loads(features)
            except ValueError:
                decoded = [f.strip() for f in features.split(",") if f.strip()]
            data = dict(data.items()) if hasattr(data, "items") else data
            data["features"] = decoded if isinstance(decoded, list) else [str(decoded)]
        return super().to_internal_value(data)


class ContactMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContactMessage
        fields = ["id", "name", "email", "message", "is_read", "created_at"]
        read_only_fields = ["id", "is_read", "created_at"]


class StudentProgressSerializer(serializers.ModelSerializer):
    student_id = serializers.IntegerField(read_only=True)
    lesson_id = serializers.IntegerField(read_only=True)
    lesson_title = serializers.CharField(source="lesson.title", read_only=True)
    lesson_slug = serializers.CharField(source="lesson.slug", read_only=True)

    class Meta:
        model = StudentProgress
        fields = ["id", "student_id", "lesson_id", "lesson_title", "lesson_slug", "completed", "last_accessed"]


class ProgressUpdateSerializer(serializers.Serializer):
    lesson_id = serializers.IntegerField(required=False)
    completed = serializers.BooleanField(default=False)


class AssistantQuestionSerializer(serializers.Serializer):
    question = serializers.CharField(trim_whitespace=False)
    role = serializers.CharField(required=False, allow_blank=True, allow_null=True)
