"""
Management command to check MarzPay credentials and connectivity.
"""

from django.core.management.base import BaseCommand, CommandError

from marzpay.client import MarzPay
from marzpay.exceptions import MarzPayError
from marzpay.utils.formatters import format_amount, parse_marzpay_amount


class Command(BaseCommand):
    help = 'Test the MarzPay API connection using the MARZPAY_* settings'

    def add_arguments(self, parser):
        parser.add_argument(
            '--balance',
            action='store_true',
            help='Also show the current account balance'
        )

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS('\n=== MarzPay Connection Test ===\n'))

        try:
            client = MarzPay.from_settings()
        except MarzPayError as e:
            raise CommandError(f'Invalid MarzPay configuration: {e.message}')

        with client:
            self.stdout.write(f"Base URL: {client.config.base_url}")

            result = client.test_connection()
            if result['status'] != 'success':
                raise CommandError(f"Connection failed: {result['error']} ({result['code']})")

            data = result['data']
            self.stdout.write(self.style.SUCCESS('Connection successful'))
            self.stdout.write(f"Business: {data['business_name']}")
            self.stdout.write(f"Account status: {data['account_status']}")

            if options['balance']:
                try:
                    formats = client.balance.get_balance_formats()
                except MarzPayError as e:
                    raise CommandError(f'Failed to check balance: {e.message}')

                currency = formats['currency'] or 'UGX'
                amount = format_amount(parse_marzpay_amount(formats['raw']), currency)
                self.stdout.write(self.style.SUCCESS(f"Account Balance: {amount}"))
