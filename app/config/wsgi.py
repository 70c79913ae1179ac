"""
WSGI config for the chat backend.

WSGI (Web Server Gateway Interface) is the traditional Python web server
interface, used by gunicorn and Django's runserver. ASGI servers use
config.asgi instead.

This file exposes the WSGI callable as a module-level variable named `application`.

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/howto/deployment/wsgi/
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
