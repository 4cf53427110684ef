"""
Management command to grant or revoke job-intake admin rights.
Usage: python manage.py set_admin someone@example.com [--revoke]
"""
from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model

User = get_user_model()


class Command(BaseCommand):
    help = 'Grant (or revoke with --revoke) the staff flag that allows posting jobs'

    def add_arguments(self, parser):
        parser.add_argument('email', type=str, help='Email of the user')
        parser.add_argument('--revoke', action='store_true', help='Remove admin rights instead of granting them')

    def handle(self, *args, **options):
        email = options['email'].strip().lower()
        users = User.objects.filter(email__iexact=email)
        if not users.exists():
            raise CommandError(f'User with email {email} does not exist')

        is_staff = not options['revoke']
        updated = users.update(is_staff=is_staff)
        action = 'Granted' if is_staff else 'Revoked'
        self.stdout.write(self.style.SUCCESS(f'{action} job admin rights for {email} ({updated} account(s))'))
