"""
WSGI config for the openhands project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'openhands.settings')

application = get_wsgi_application()
