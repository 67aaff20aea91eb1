"""Tests for the props admin registration."""

import pytest

from django.contrib import admin
from django.urls import reverse

from props.factories import (
    NotificationFactory,
    PropStatusHistoryFactory,
    TaskCardFactory,
)
from props.models import (
    Notification,
    Prop,
    PropStatusHistory,
    Show,
    TaskBoard,
    TaskCard,
    TaskList,
)


class TestAdminRegistration:
    @pytest.mark.parametrize(
        "model",
        [
            Show,
            Prop,
            PropStatusHistory,
            TaskBoard,
            TaskList,
            TaskCard,
            Notification,
        ],
    )
    def test_registered_with_unfold(self, model):
        from unfold.admin import ModelAdmin as UnfoldModelAdmin

        assert isinstance(admin.site._registry[model], UnfoldModelAdmin)

    def test_status_colours_cover_every_status(self):
        from props.admin import STATUS_LABELS
        from props.statuses import PropStatus

        assert set(STATUS_LABELS) == set(PropStatus.values)


@pytest.mark.django_db
class TestAdminPages:
    @pytest.mark.parametrize(
        "name",
        [
            "show",
            "prop",
            "propstatushistory",
            "taskboard",
            "tasklist",
            "taskcard",
            "notification",
        ],
    )
    def test_changelist_loads(self, admin_client, prop, board, name):
        TaskCardFactory(task_list=board.lists.first(), prop=prop)
        PropStatusHistoryFactory(prop=prop)
        NotificationFactory()

        response = admin_client.get(
            reverse(f"admin:props_{name}_changelist")
        )

        assert response.status_code == 200

    def test_prop_change_page_shows_history(self, admin_client, prop):
        PropStatusHistoryFactory(prop=prop, notes="moved to store")

        response = admin_client.get(
            reverse("admin:props_prop_change", args=[prop.pk])
        )

        assert response.status_code == 200
        assert b"moved to store" in response.content

    def test_history_is_read_only(self, admin_user, prop):
        from django.test import RequestFactory

        model_admin = admin.site._registry[PropStatusHistory]
        request = RequestFactory().get("/")
        request.user = admin_user
        entry = PropStatusHistoryFactory(prop=prop)

        assert model_admin.has_add_permission(request) is False
        assert model_admin.has_delete_permission(request, entry) is False
        assert "notes" in model_admin.get_readonly_fields(request, entry)

    def test_prop_status_not_editable(self, admin_user):
        from django.test import RequestFactory

        model_admin = admin.site._registry[Prop]
        request = RequestFactory().get("/")
        request.user = admin_user

        assert "status" in model_admin.get_readonly_fields(request)
