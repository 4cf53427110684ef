"""
WSGI config for the applyhub project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'applyhub.settings')

application = get_wsgi_application()
