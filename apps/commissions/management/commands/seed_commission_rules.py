"""
Management command to create the default commission rules.

Rules whose name already exists are left untouched, so the command is
safe to run on every deploy.

Usage:
    python manage.py seed_commission_rules
    python manage.py seed_commission_rules --dry-run
"""

from django.core.management.base import BaseCommand
from apps.commissions.models import CommissionRule
from apps.commissions.services import DEFAULT_RULES, seed_default_rules, describe_rule


class Command(BaseCommand):
    help = 'Create the default commission rules (standard, dealer, economy, luxury)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show which rules would be created without making changes',
        )

    def handle(self, *args, **options):
        if options['dry_run']:
            existing = set(CommissionRule.objects.values_list('name', flat=True))
            missing = [rule['name'] for rule in DEFAULT_RULES if rule['name'] not in existing]
            if not missing:
                self.stdout.write(self.style.SUCCESS('All default rules exist.'))
                return
            for name in missing:
                self.stdout.write(f'  - would create: {name}')
            self.stdout.write(self.style.WARNING('--dry-run mode: No changes made.'))
            return

        created = seed_default_rules()

        if not created:
            self.stdout.write(self.style.SUCCESS('All default rules exist. Nothing to do.'))
            return

        for rule in created:
            self.stdout.write(f'  + {describe_rule(rule)}')
        self.stdout.write(self.style.SUCCESS(f'Created {len(created)} commission rule(s).'))
