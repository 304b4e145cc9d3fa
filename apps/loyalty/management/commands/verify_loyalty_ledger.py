from django.core.management.base import BaseCommand, CommandError

from apps.loyalty.services import LoyaltyAuditService
from apps.tenants.models import Tenant


class Command(BaseCommand):
    help = 'Check that customer balances and tiers agree with their loyalty ledger'

    def add_arguments(self, parser):
        parser.add_argument('--tenant', help='Only check the tenant with this slug')

    def handle(self, *args, **options):
        tenants = Tenant.objects.order_by('slug')
        if options.get('tenant'):
            tenants = tenants.filter(slug=options['tenant'])
            if not tenants.exists():
                raise CommandError(f"Tenant '{options['tenant']}' not found")

        total_problems = 0
        for tenant in tenants:
            report = LoyaltyAuditService.verify_tenant(tenant.id)
            if not report:
                self.stdout.write(f'{tenant.slug}: ledger consistent')
                continue

            for customer_id, problems in report.items():
                for problem in problems:
                    self.stdout.write(self.style.ERROR(f'{tenant.slug} customer {customer_id}: {problem}'))
                total_problems += len(problems)

        if total_problems:
            raise CommandError(f'Found {total_problems} ledger problems')

        self.stdout.write(self.style.SUCCESS('Loyalty ledger verification passed'))
