import os

from django.core.exceptions import ImproperlyConfigured

from .base import *

DEBUG = False

if not SECRET_KEY:
    raise ImproperlyConfigured("DJANGO_SECRET_KEY must be set in production.")

if os.getenv("DATABASE_PATH"):
    DATABASES["default"]["NAME"] = os.getenv("DATABASE_PATH")

SECURE_CONTENT_TYPE_NOSNIFF = True
