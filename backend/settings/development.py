from .base import *

DEBUG = True

SECRET_KEY = SECRET_KEY or "django-insecure-dev-only"

ALLOWED_HOSTS = ["127.0.0.1", "localhost", "0.0.0.0"]
