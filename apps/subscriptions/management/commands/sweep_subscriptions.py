"""
Management command to expire lapsed subscriptions once.

Runs the same sweep as the scheduled celery task, for cron setups without
celery beat or for manual runs.

Usage:
    python manage.py sweep_subscriptions
    python manage.py sweep_subscriptions --dry-run
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.subscriptions.models import Subscription, SubscriptionStatus
from apps.subscriptions.services import ExpirationSweeper


class Command(BaseCommand):
    help = 'Expire subscriptions whose end date has passed and notify parents'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='List lapsed subscriptions without changing them',
        )

    def handle(self, *args, **options):
        if options['dry_run']:
            lapsed = (
                Subscription.objects
                .filter(status=SubscriptionStatus.ACTIVE, end_date__lt=timezone.now())
                .select_related('canteen_student__enrolled_student')
            )
            count = lapsed.count()
            if count == 0:
                self.stdout.write(self.style.SUCCESS('No lapsed subscription. All good!'))
                return
            self.stdout.write(f'\nFound {count} lapsed subscription(s):\n')
            for subscription in lapsed:
                self.stdout.write(
                    f'  - {subscription.canteen_student.display_name} | '
                    f'{subscription.duration} days | ended {subscription.end_date:%Y-%m-%d %H:%M}'
                )
            self.stdout.write(self.style.WARNING('\n--dry-run mode: No changes made.'))
            return

        report = ExpirationSweeper().run()
        if report is None:
            self.stdout.write(self.style.WARNING('Another sweep is already running.'))
            return

        message = (
            f'Expired {report.expired} subscription(s) '
            f'({report.found} found, {report.skipped} skipped, {report.failed} failed).'
        )
        if report.failed:
            self.stdout.write(self.style.ERROR(message))
        else:
            self.stdout.write(self.style.SUCCESS(message))
