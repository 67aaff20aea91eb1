"""Tests for accounts Django admin interface."""

import pytest

from django.contrib.admin.sites import AdminSite
from django.urls import reverse

from accounts.admin import CustomUserAdmin
from accounts.models import CustomUser


def _flatten(fields):
    flat = []
    for f in fields:
        if isinstance(f, (list, tuple)):
            flat.extend(f)
        else:
            flat.append(f)
    return flat


class TestCustomUserAdminLayout:
    def test_admin_uses_unfold_model_admin(self):
        from unfold.admin import ModelAdmin as UnfoldModelAdmin

        assert issubclass(CustomUserAdmin, UnfoldModelAdmin)

    def test_fieldsets_use_tab_classes(self):
        admin_obj = CustomUserAdmin(CustomUser, AdminSite())
        for _name, opts in admin_obj.fieldsets:
            assert "tab" in opts.get("classes", [])

    def test_notifications_tab(self):
        admin_obj = CustomUserAdmin(CustomUser, AdminSite())
        tabs = {name: opts for name, opts in admin_obj.fieldsets}
        assert _flatten(tabs["Notifications"]["fields"]) == [
            "notification_preferences"
        ]

    def test_profile_tab(self):
        admin_obj = CustomUserAdmin(CustomUser, AdminSite())
        tabs = {name: opts for name, opts in admin_obj.fieldsets}
        flat = _flatten(tabs["Profile"]["fields"])
        for field in ["username", "email", "display_name", "phone_number"]:
            assert field in flat


@pytest.mark.django_db
class TestCustomUserAdminPages:
    def test_changelist_loads(self, admin_client, user):
        response = admin_client.get(
            reverse("admin:accounts_customuser_changelist")
        )
        assert response.status_code == 200
        assert b"Test User" in response.content

    def test_change_page_loads(self, admin_client, user):
        response = admin_client.get(
            reverse("admin:accounts_customuser_change", args=[user.pk])
        )
        assert response.status_code == 200

    def test_search_by_display_name(self, admin_client, user):
        response = admin_client.get(
            reverse("admin:accounts_customuser_changelist"),
            {"q": "Test User"},
        )
        assert response.status_code == 200
        assert b"testuser" in response.content
