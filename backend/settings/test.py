from .base import *

DEBUG = False

SECRET_KEY = "django-insecure-test"
TOKEN_SECRET_KEY = "test-token-signing-key"
GROQ_API_KEY = None

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

MEDIA_ROOT = BASE_DIR / ".test-uploads"

LOGGING["loggers"]["academy"]["level"] = "WARNING"
