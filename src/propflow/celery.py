"""Celery configuration for propflow."""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "propflow.settings")

app = Celery("propflow")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
