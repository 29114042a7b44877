"""
Django management command to seed unclaimed license keys.

Keys are printed one per line so they can be piped to a file.
"""

import logging

from django.core.management.base import BaseCommand, CommandError

from licenses.infrastructure.models import DEFAULT_KEY_PREFIX, License, generate_license_key

logger = logging.getLogger(__name__)

MAX_ATTEMPTS_PER_KEY = 5


class Command(BaseCommand):
    """Command to create unclaimed license keys."""

    help = "Create unclaimed license keys (PREFIX-XXXX-XXXX-XXXX-XXXX)"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--count",
            type=int,
            default=1,
            help="Number of keys to create (default: 1)",
        )
        parser.add_argument(
            "--plan",
            choices=["30d", "90d"],
            default="30d",
            help="Plan tier for the keys (default: 30d)",
        )
        parser.add_argument(
            "--prefix",
            type=str,
            default=DEFAULT_KEY_PREFIX,
            help=f"Key prefix (default: {DEFAULT_KEY_PREFIX})",
        )

    def handle(self, *args, **options):
        """Handle command execution."""
        count = options["count"]
        plan = options["plan"]
        prefix = options["prefix"].strip().upper()

        if count < 1:
            raise CommandError("--count must be at least 1")
        if not prefix.isalnum():
            raise CommandError("--prefix must be alphanumeric")

        keys = self.generate_unique_keys(prefix, count)
        License.objects.bulk_create(License(license_key=key, plan_type=plan) for key in keys)
        logger.info("Created license keys", extra={"count": len(keys), "plan_type": plan})

        for key in keys:
            self.stdout.write(key)
        self.stdout.write(self.style.SUCCESS(f"Created {len(keys)} {plan} license key(s)"))

    def generate_unique_keys(self, prefix: str, count: int):
        """Generate ``count`` keys not already present in the table."""
        keys = []
        seen = set()
        for _ in range(count):
            for _ in range(MAX_ATTEMPTS_PER_KEY):
                key = generate_license_key(prefix)
                if key not in seen and not License.objects.filter(license_key=key).exists():
                    break
            else:
                raise CommandError("Could not generate a unique license key")
            seen.add(key)
            keys.append(key)
        return keys
