"""Management command to report storage usage per user."""

import logging
from typing import Any

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from server.apps.files.infrastructure.metadata import CATEGORIES
from server.apps.files.logic.quota_operations import get_total_space_used
from server.apps.files.presentation import (
    calculate_percentage,
    convert_file_size,
)

User = get_user_model()
logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Print each user's quota snapshot."""

    help = 'Report storage used per user and category'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--email',
            help='Only report the user with this email',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the report command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        users = User.objects.order_by('id')
        if options['email']:
            users = users.filter(email__iexact=options['email'])
            if not users.exists():
                raise CommandError(f'No user with email {options["email"]}')

        count = 0
        for user in users:
            snapshot = get_total_space_used(user)
            self.stdout.write(
                f'{user.email or user.username}: '
                f'{convert_file_size(snapshot.used)} of '
                f'{convert_file_size(snapshot.all)} '
                f'({calculate_percentage(snapshot.used, snapshot.all)}%)',
            )
            for category in CATEGORIES:
                usage = snapshot[category]
                if usage.size:
                    self.stdout.write(
                        f'  {category}: {convert_file_size(usage.size)}',
                    )
            count += 1

        logger.info('Reported storage usage for %d users', count)
        self.stdout.write(
            self.style.SUCCESS(f'Reported storage usage for {count} users'),
        )
