"""
ASGI config for the openhands project.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'openhands.settings')

application = get_asgi_application()
