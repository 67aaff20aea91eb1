"""Tests for propflow infrastructure: settings, Celery, ASGI, views."""

import pytest

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.http import Http404
from django.test import RequestFactory


class TestInfrastructureSettings:
    def test_celery_broker_configured(self):
        assert settings.CELERY_BROKER_URL

    def test_cache_backend_configured(self):
        assert "default" in settings.CACHES

    def test_auth_user_model_is_custom(self):
        assert settings.AUTH_USER_MODEL == "accounts.CustomUser"

    def test_unfold_before_admin(self):
        apps = settings.INSTALLED_APPS
        assert apps.index("unfold") < apps.index("django.contrib.admin")

    def test_channels_and_beat_installed(self):
        assert "channels" in settings.INSTALLED_APPS
        assert "django_celery_beat" in settings.INSTALLED_APPS

    def test_channel_layers_configured(self):
        assert "default" in settings.CHANNEL_LAYERS

    def test_prop_settings_defaults(self):
        assert settings.PROP_NOTE_SUMMARY_LENGTH == 100
        assert settings.PROP_MEDIA_UPLOAD_WORKERS == 4
        assert settings.PROP_AUTO_REVERT_HOURS == 48
        assert settings.PROP_AUTO_REVERT_BATCH_SIZE == 500

    def test_props_logger_configured(self):
        assert "props" in settings.LOGGING["loggers"]


class TestCelery:
    def test_auto_revert_scheduled_hourly(self):
        from props.tasks import auto_revert_repaired_props

        entry = settings.CELERY_BEAT_SCHEDULE["auto-revert-repaired-props"]
        assert entry["task"] == auto_revert_repaired_props.name
        assert entry["schedule"].minute == {0}

    def test_celery_app_exported(self):
        from propflow import celery_app

        assert celery_app.main == "propflow"


class TestAsgi:
    def test_websocket_route(self):
        from props.routing import websocket_urlpatterns

        routes = [str(p.pattern) for p in websocket_urlpatterns]
        assert routes == ["ws/notifications/"]

    def test_application_routes_protocols(self):
        from propflow.asgi import application

        assert set(application.application_mapping) == {
            "http",
            "websocket",
        }


class TestHealthEndpoint:
    def test_health_returns_json(self, client, db):
        response = client.get("/health/")
        assert response.status_code == 200
        assert response["Content-Type"] == "application/json"
        data = response.json()
        assert data["status"] == "ok"
        assert data["db"] is True
        assert data["cache"] is True


class TestMediaProxy:
    def test_serves_stored_file(self, db):
        from propflow.views import media_proxy

        name = default_storage.save(
            "props/1/damage/images/crack.jpg", ContentFile(b"jpeg-bytes")
        )
        request = RequestFactory().get(f"/media/{name}")

        response = media_proxy(request, name)

        assert response.status_code == 200
        assert response["Content-Type"] == "image/jpeg"
        assert b"".join(response.streaming_content) == b"jpeg-bytes"
        response.close()

    def test_missing_file_is_404(self):
        from propflow.views import media_proxy

        request = RequestFactory().get("/media/nope.jpg")
        with pytest.raises(Http404):
            media_proxy(request, "props/1/damage/images/nope.jpg")
