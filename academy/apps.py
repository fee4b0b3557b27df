from django.apps import AppConfig
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


def check_token_secret() -> None:
    if not getattr(settings, "TOKEN_SECRET_KEY", None):
        raise ImproperlyConfigured(
            "TOKEN_SECRET_KEY is not set. Session tokens cannot be signed without it."
        )


class AcademyConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "academy"

    def ready(self):
        check_token_secret()
