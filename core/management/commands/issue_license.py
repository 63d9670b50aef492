"""
Django management command to issue or replace a license from the CLI.
"""

from django.core.management.base import BaseCommand, CommandError

from licenses.application.services.engine_factory import build_license_engine


class Command(BaseCommand):
    """Command to issue or replace a license."""

    help = "Issue a license, or fully replace the license stored under the same key"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("license_key", help="Raw license key (stored hashed)")
        parser.add_argument("--plan", default="pro", help="free, pro or enterprise")
        parser.add_argument(
            "--status", default="active", help="active, inactive, expired or invalid"
        )
        parser.add_argument(
            "--feature",
            action="append",
            default=[],
            dest="features",
            help="Feature name; repeat for several",
        )
        parser.add_argument(
            "--expires-at",
            type=int,
            default=None,
            help="Unix timestamp; omit or 0 for no expiry",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        result = build_license_engine().issue_or_update_license(
            license_key=options["license_key"],
            plan=options["plan"],
            status=options["status"],
            features=options["features"],
            expires_at=options["expires_at"],
        )
        if not result.ok:
            raise CommandError(result.message)

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(result.message))
