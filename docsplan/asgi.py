"""
ASGI config for docsplan project.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "docsplan.settings")

application = get_asgi_application()
