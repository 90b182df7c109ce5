"""
Management command to delete Relations whose owner or target no longer exists.

Usage:
    django-admin prune_relations
    django-admin prune_relations --dry-run
"""

from django.core.management.base import BaseCommand

from storefront.related_products.services import prune_orphan_relations


class Command(BaseCommand):
    help = 'Delete relations pointing from or to records that no longer exist'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show how many relations would be deleted without deleting them',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        if dry_run:
            self.stdout.write(self.style.WARNING('DRY RUN MODE - No data will be deleted'))

        count = prune_orphan_relations(dry_run=dry_run)

        if dry_run:
            self.stdout.write(self.style.WARNING(f'DRY RUN: Would have deleted {count} orphaned relations'))
        else:
            self.stdout.write(self.style.SUCCESS(f'Prune complete: Deleted {count} orphaned relations'))
