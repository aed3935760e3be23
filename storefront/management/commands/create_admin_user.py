from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = 'Create the back office account (any signed-in account can use the back office)'

    def add_arguments(self, parser):
        parser.add_argument('--email', default='admin@ozera.com')
        parser.add_argument('--password', default='admin123')

    def handle(self, *args, **options):
        User = get_user_model()
        email = options['email']

        if User.objects.filter(username=email).exists():
            self.stdout.write(self.style.WARNING(f'Back office account already exists: {email}'))
            return

        # Staff so the same account also opens /admin/
        User.objects.create_user(
            username=email,
            email=email,
            password=options['password'],
            is_staff=True,
        )
        self.stdout.write(self.style.SUCCESS(f'Back office account created: {email}'))
