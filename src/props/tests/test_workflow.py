"""Tests for automatic follow-up task creation."""

from unittest.mock import patch

import pytest

from django.db import DatabaseError

from props.factories import (
    PropFactory,
    ShowMemberFactory,
    TaskBoardFactory,
    TaskCardFactory,
    TaskListFactory,
    UserFactory,
)
from props.models import Notification, TaskCard
from props.services.workflow import (
    build_card_content,
    choose_task_list,
    maybe_create_follow_up,
)


class TestCardContent:
    @pytest.mark.parametrize(
        "status,title,priority",
        [
            (
                "damaged_awaiting_replacement",
                "Replace damaged prop: Sword",
                "high",
            ),
            (
                "damaged_awaiting_repair",
                "Repair damaged prop: Sword",
                "high",
            ),
            ("out_for_repair", "Track repair: Sword", "medium"),
            ("under_maintenance", "Maintenance required: Sword", "medium"),
            ("missing", "Locate missing prop: Sword", "high"),
        ],
    )
    @pytest.mark.django_db
    def test_templates(self, prop, status, title, priority):
        content = build_card_content(prop, status)
        assert content["title"] == title
        assert content["priority"] == priority

    @pytest.mark.django_db
    def test_repair_labels(self, prop):
        content = build_card_content(prop, "under_maintenance")
        assert content["labels"] == ["repair", "maintenance", "prop"]

    @pytest.mark.django_db
    def test_missing_labels(self, prop):
        content = build_card_content(prop, "missing")
        assert content["labels"] == ["missing", "prop"]

    @pytest.mark.django_db
    def test_description_details(self, prop):
        content = build_card_content(
            prop, "under_maintenance", "hinge broken"
        )
        description = content["description"]
        assert "- Category: Weapons" in description
        assert "**Issue Description:**\nhinge broken" in description
        assert description.endswith(f"Linked: [@Sword](prop:{prop.pk})")

    @pytest.mark.django_db
    def test_description_without_notes(self, prop):
        content = build_card_content(prop, "missing")
        assert "Issue Description" not in content["description"]


@pytest.mark.django_db
class TestChooseTaskList:
    def test_prefers_repair_list(self, board):
        assert choose_task_list(board).name == "Repairs"

    def test_falls_back_to_todo(self, show):
        board = TaskBoardFactory(show=show)
        TaskListFactory(board=board, name="Backlog", order=0)
        TaskListFactory(board=board, name="To Do", order=1)
        assert choose_task_list(board).name == "To Do"

    def test_falls_back_to_first_list(self, show):
        board = TaskBoardFactory(show=show)
        TaskListFactory(board=board, name="Later", order=5)
        TaskListFactory(board=board, name="Now", order=1)
        assert choose_task_list(board).name == "Now"

    def test_no_lists(self, show):
        assert choose_task_list(TaskBoardFactory(show=show)) is None


@pytest.mark.django_db
class TestMaybeCreateFollowUp:
    def test_creates_card_for_repair_family(self, prop, board, supervisor):
        card, errors = maybe_create_follow_up(
            prop, "confirmed", "under_maintenance", notes="hinge broken"
        )
        assert errors == []
        assert card.title == "Maintenance required: Sword"
        assert card.priority == "medium"
        assert card.prop == prop
        assert card.task_list.name == "Repairs"
        assert card.status == "not_started"
        assert card.completed is False
        assert list(card.assigned_to.all()) == [supervisor]

    def test_assignee_notified(self, prop, board, supervisor):
        card, _ = maybe_create_follow_up(prop, "confirmed", "missing")
        notification = Notification.objects.get(user=supervisor)
        assert notification.type == "task_assigned"
        assert notification.title == "New Missing Prop Task"
        assert notification.task_card == card
        assert notification.metadata == {
            "boardId": board.pk,
            "taskId": card.pk,
        }

    def test_assignee_opted_out_not_notified(self, prop, board, supervisor):
        supervisor.notification_preferences = {"task_assigned": False}
        supervisor.save()

        card, errors = maybe_create_follow_up(
            prop, "confirmed", "under_maintenance"
        )
        assert card is not None
        assert errors == []
        assert not Notification.objects.filter(user=supervisor).exists()

    def test_assignee_who_made_the_change_not_notified(
        self, prop, board, supervisor
    ):
        card, errors = maybe_create_follow_up(
            prop, "confirmed", "under_maintenance", created_by=supervisor
        )
        assert list(card.assigned_to.all()) == [supervisor]
        assert errors == []
        assert not Notification.objects.filter(user=supervisor).exists()

    def test_card_unassigned_without_supervisor(self, prop, board):
        card, errors = maybe_create_follow_up(
            prop, "confirmed", "under_maintenance"
        )
        assert card.assigned_to.count() == 0
        assert errors == []

    def test_first_supervisor_assigned(self, show, prop, board, supervisor):
        ShowMemberFactory(
            show=show, user=UserFactory(username="later"), role="god"
        )
        card, _ = maybe_create_follow_up(prop, "confirmed", "missing")
        assert list(card.assigned_to.all()) == [supervisor]

    def test_no_card_for_other_statuses(self, prop, board):
        card, errors = maybe_create_follow_up(
            prop, "confirmed", "available_in_storage"
        )
        assert card is None
        assert errors == []
        assert not TaskCard.objects.exists()

    def test_no_board_skips_with_warning(self, prop):
        with patch("props.services.workflow.logger") as mock_logger:
            card, errors = maybe_create_follow_up(
                prop, "confirmed", "under_maintenance"
            )
        assert card is None
        assert errors == []
        mock_logger.warning.assert_called_once()
        assert "No task board" in mock_logger.warning.call_args[0][0]

    def test_board_without_lists(self, prop):
        TaskBoardFactory(show=prop.show)
        card, errors = maybe_create_follow_up(
            prop, "confirmed", "under_maintenance"
        )
        assert card is None
        assert errors == []

    def test_open_card_prevents_duplicate(self, prop, board):
        existing = TaskCardFactory(
            task_list=board.lists.first(), prop=prop, completed=False
        )
        card, errors = maybe_create_follow_up(
            prop, "under_maintenance", "damaged_awaiting_repair"
        )
        assert card is None
        assert errors == []
        assert list(TaskCard.objects.filter(prop=prop)) == [existing]

    def test_completed_card_does_not_block(self, prop, board):
        TaskCardFactory(
            task_list=board.lists.first(), prop=prop, completed=True
        )
        card, _ = maybe_create_follow_up(
            prop, "under_maintenance", "damaged_awaiting_repair"
        )
        assert card is not None
        assert TaskCard.objects.filter(prop=prop).count() == 2

    def test_open_card_for_other_prop_does_not_block(self, show, prop, board):
        other = PropFactory(show=show)
        TaskCardFactory(task_list=board.lists.first(), prop=other)
        card, _ = maybe_create_follow_up(prop, "confirmed", "missing")
        assert card is not None

    def test_create_failure_reported(self, prop, board):
        with patch(
            "props.services.workflow.TaskCard.objects.create",
            side_effect=DatabaseError("db down"),
        ):
            card, errors = maybe_create_follow_up(
                prop, "confirmed", "under_maintenance"
            )
        assert card is None
        assert len(errors) == 1
        assert errors[0].step == "workflow"
        assert errors[0].prop_id == prop.pk
