import os

from django.core.management.base import BaseCommand, CommandError

from academy.exceptions import DuplicateUser
from academy.models import AppUser, Role
from academy.services import create_user


class Command(BaseCommand):
    help = "Create the first admin account if no admin exists yet"

    def add_arguments(self, parser):
        parser.add_argument("--username", default=os.getenv("ADMIN_USERNAME", "admin"))
        parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"),
                            help="Defaults to $ADMIN_PASSWORD")
        parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL"))

    def handle(self, *args, **opts):
        if AppUser.objects.filter(role=Role.ADMIN).exists():
            self.stdout.write(self.style.WARNING("An admin already exists; nothing to do."))
            return
        if not opts["password"]:
            raise CommandError("An admin password is required (--password or ADMIN_PASSWORD).")

        try:
            user = create_user(opts["username"], opts["password"], role=Role.ADMIN, email=opts["email"])
        except DuplicateUser:
            raise CommandError(f"Username {opts['username']} is already taken.")
        self.stdout.write(self.style.SUCCESS(f"Created admin {user.username}"))
