"""WSGI entry point for the hostel booking API.

Used by runserver and by WSGI servers such as gunicorn. Every request
handler runs in its own worker thread or process; booking allocation
relies on database isolation rather than in-process locks.
"""

import os
from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_wsgi_application()
