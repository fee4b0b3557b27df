from django.db import models


class Role(models.TextChoices):
    ADMIN = "admin", "Admin"
    TEACHER = "teacher", "Teacher"
    STUDENT = "student", "Student"


class AppUser(models.Model):
    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(blank=True, null=True)
    password_hash = models.CharField(max_length=256)
    role = models.CharField(max_length=16, choices=Role.choices)
    first_name = models.CharField(max_length=150, blank=True, null=True)
    phone = models.CharField(max_length=50, blank=True, null=True)
    teams_id = models.CharField(max_length=150, blank=True, null=True)
    country = models.CharField(max_length=100, blank=True, null=True)
    city = models.CharField(max_length=100, blank=True, null=True)
    program = models.CharField(max_length=150, blank=True, null=True)
    preferred_days = models.CharField(max_length=150, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.username} ({self.role})"


class Category(models.Model):
    name = models.CharField(max_length=150)
    slug = models.SlugField(max_length=150, unique=True)
    description = models.TextField(blank=True, default="")

    class Meta:
        db_table = "categories"
        ordering = ["id"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name


class Lesson(models.Model):
    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PUBLISHED = "published", "Published"

    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    short_description = models.TextField(blank=True, default="")
    full_content = models.TextField(blank=True, default="")
    featured_image = models.CharField(max_length=500, blank=True, null=True)
    audio_file = models.CharField(max_length=500, blank=True, null=True)
    video_link = models.CharField(max_length=500, blank=True, null=True)
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name="lessons")
    teacher = models.ForeignKey(
        AppUser, null=True, blank=True, on_delete=models.SET_NULL, related_name="lessons"
    )
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PUBLISHED)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "lessons"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.title


class Blog(models.Model):
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    content = models.TextField()
    category = models.CharField(max_length=150, blank=True, null=True)
    image = models.CharField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "blogs"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.title


class SpecializedCourse(models.Model):
    title = models.CharField(max_length=255)
    description = models.TextField()
    features = models.JSONField(default=list)  # list of strings
    icon_name = models.CharField(max_length=100, blank=True, null=True)
    color_class = models.CharField(max_length=100, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "specialized_courses"
        ordering = ["created_at", "id"]

    def __str__(self):
        return self.title


class ContactMessage(models.Model):
    name = models.CharField(max_length=255)
    email = models.EmailField()
    message = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "contact_messages"
        ordering = ["-created_at", "-id"]


class StudentProgress(models.Model):
    student = models.ForeignKey(AppUser, on_delete=models.CASCADE, related_name="progress")
    lesson = models.ForeignKey(Lesson, on_delete=models.CASCADE, related_name="progress")
    completed = models.BooleanField(default=False)
    last_accessed = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "student_progress"
        constraints = [
            models.UniqueConstraint(fields=["student", "lesson"], name="uq_student_lesson"),
        ]


class AICacheEntry(models.Model):
    question = models.TextField()
    response = models.TextField()
    user_role = models.CharField(max_length=32, default="visitor")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "ai_cache"
        # Lookup key only; duplicates are allowed (append-only)
        indexes = [
            models.Index(fields=["question", "user_role"], name="idx_ai_cache_lookup"),
        ]
        verbose_name_plural = "AI cache entries"
