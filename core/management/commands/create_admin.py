"""
Django management command to bootstrap an administrator.

Self-registration always yields customers; this is the only way to
create an admin identity.
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import DomainException
from core.domain.value_objects import Role
from identities.application.commands.register_identity import RegisterIdentityCommand
from identities.application.handlers.register_identity_handler import RegisterIdentityHandler
from identities.infrastructure.repositories.django_identity_repository import (
    DjangoIdentityRepository,
)

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to create an admin identity."""

    help = "Create an administrator account"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("--email", type=str, required=True, help="Admin email")
        parser.add_argument("--password", type=str, required=True, help="Admin password")
        parser.add_argument(
            "--full-name",
            type=str,
            default="",
            help="Display name (default: empty)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = RegisterIdentityHandler(identity_repository=DjangoIdentityRepository())
        command = RegisterIdentityCommand(
            email=options["email"],
            password=options["password"],
            full_name=options["full_name"],
        )
        try:
            identity = async_to_sync(handler.handle)(command, role=Role.ADMIN)
        except DomainException as e:
            raise CommandError(f"{e.code}: {e.message}") from e

        self.stdout.write(
            self.style.SUCCESS(f"Admin {identity.email} created (id {identity.id})")
        )
