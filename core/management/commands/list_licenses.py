"""
Django management command to list the most recent licenses.
"""

from django.core.management.base import BaseCommand

from licenses.application.services.engine_factory import build_license_engine


class Command(BaseCommand):
    """Command to list licenses, newest first."""

    help = "List the most recently created licenses"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("--limit", type=int, default=100, help="Maximum number of rows")

    def handle(self, *args, **options):
        """Execute the command."""
        items = build_license_engine().list_licenses(options["limit"])
        if not items:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("No licenses"))
            return

        for item in items:
            expires = item.expires_at if item.expires_at else "never"
            self.stdout.write(
                f"{item.plan:<10} {item.status:<8} expires={expires} "
                f"created={item.created_at.isoformat()}"
            )
