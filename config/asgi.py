"""ASGI entry point for the hostel booking API.

Serves the same HTTP application as wsgi.py for ASGI servers such as
uvicorn or daphne.
"""

import os
from django.core.asgi import get_asgi_application  # type: ignore

# Production servers set DJANGO_SETTINGS_MODULE=config.settings.prod.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_asgi_application()
