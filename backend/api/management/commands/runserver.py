"""``runserver`` defaulting to the configured ``PORT``."""
from __future__ import annotations

from django.conf import settings
from django.core.management.commands.runserver import Command as BaseRunserverCommand


class Command(BaseRunserverCommand):
    default_port = str(settings.PORT)
