"""Models for prop lifecycle tracking."""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from .statuses import PropStatus


class Show(models.Model):
    """A production that owns props, a team roster and task boards."""

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="ShowMember",
        related_name="shows",
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class ShowMember(models.Model):
    """A user's role on a show's team."""

    ROLE_CHOICES = [
        ("god", "God"),
        ("admin", "Admin"),
        ("props_supervisor", "Props Supervisor"),
        ("props_team", "Props Team"),
        ("stage_manager", "Stage Manager"),
        ("editor", "Editor"),
        ("viewer", "Viewer"),
    ]

    # Roles that triage repair and maintenance work.
    SUPERVISOR_ROLES = ("props_supervisor", "god", "admin")

    show = models.ForeignKey(
        Show, on_delete=models.CASCADE, related_name="team"
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="show_memberships",
    )
    role = models.CharField(
        max_length=30, choices=ROLE_CHOICES, default="props_team"
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["joined_at", "pk"]
        constraints = [
            models.UniqueConstraint(
                fields=["show", "user"],
                name="unique_member_per_show",
            ),
        ]

    def __str__(self):
        return f"{self.user} ({self.get_role_display()}) on {self.show}"

    @property
    def is_supervisor(self):
        return self.role in self.SUPERVISOR_ROLES


class Prop(models.Model):
    """A physical inventory item tracked for a show.

    Status changes must go through
    ``props.services.status_update.update_prop_status`` so that history,
    cleanup, follow-up tasks and notifications stay consistent.
    """

    show = models.ForeignKey(
        Show, on_delete=models.CASCADE, related_name="props"
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, blank=True)
    location = models.CharField(
        max_length=200,
        blank=True,
        help_text="Assigned storage location",
    )
    current_location = models.CharField(
        max_length=200,
        blank=True,
        help_text="Where the prop physically is right now",
    )
    assigned_to = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="assigned_props",
    )
    checked_out_details = models.JSONField(
        null=True,
        blank=True,
        help_text="Who has the prop and where, while checked out",
    )
    status = models.CharField(
        max_length=40,
        choices=PropStatus.choices,
        default=PropStatus.CONFIRMED,
    )
    last_status_update = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]
        indexes = [
            models.Index(fields=["status"], name="idx_prop_status"),
            models.Index(
                fields=["status", "last_status_update"],
                name="idx_prop_status_updated",
            ),
        ]

    def __str__(self):
        return self.name


class PropStatusHistory(models.Model):
    """Append-only audit record of one prop status change.

    Only ``related_task`` and ``notified`` may be written after creation.
    Both are filled in by side effects that run once the status change is
    persisted.
    """

    BACKFILL_FIELDS = frozenset({"related_task", "notified"})

    prop = models.ForeignKey(
        Prop, on_delete=models.CASCADE, related_name="status_history"
    )
    previous_status = models.CharField(
        max_length=40, choices=PropStatus.choices
    )
    new_status = models.CharField(max_length=40, choices=PropStatus.choices)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="prop_status_changes",
        help_text="Empty for automated changes",
    )
    date = models.DateTimeField(default=timezone.now)
    notes = models.TextField(blank=True)
    reason = models.TextField(blank=True)
    related_task = models.ForeignKey(
        "TaskCard",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="status_changes",
    )
    damage_image_urls = models.JSONField(default=list, blank=True)
    damage_video_urls = models.JSONField(default=list, blank=True)
    notified = models.JSONField(
        default=list,
        blank=True,
        help_text="Ids of users sent a status notification",
    )
    is_override = models.BooleanField(
        default=False,
        help_text="Transition was forced past the transition table",
    )
    automated = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-pk"]
        verbose_name_plural = "prop status history"
        indexes = [
            models.Index(fields=["date"], name="idx_status_history_date"),
        ]

    def __str__(self):
        return (
            f"{self.prop.name}: {self.get_previous_status_display()} -> "
            f"{self.get_new_status_display()}"
        )

    def save(self, *args, **kwargs):
        if self.pk is not None:
            update_fields = kwargs.get("update_fields")
            if not update_fields or not set(update_fields) <= (
                self.BACKFILL_FIELDS
            ):
                raise ValidationError(
                    "Status history entries are immutable and cannot be "
                    "modified."
                )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(
            "Status history entries are immutable and cannot be deleted."
        )

    def as_record(self) -> dict:
        """Serialise to the document shape, omitting empty optionals."""
        record = {
            "id": self.pk,
            "propId": self.prop_id,
            "previousStatus": self.previous_status,
            "newStatus": self.new_status,
            "updatedBy": self.updated_by_id,
            "date": self.date.isoformat(),
        }
        if self.notes:
            record["notes"] = self.notes
        if self.reason:
            record["reason"] = self.reason
        if self.related_task_id:
            record["relatedTaskId"] = self.related_task_id
        if self.damage_image_urls:
            record["damageImageUrls"] = list(self.damage_image_urls)
        if self.damage_video_urls:
            record["damageVideoUrls"] = list(self.damage_video_urls)
        if self.notified:
            record["notified"] = list(self.notified)
        if self.is_override:
            record["override"] = True
        if self.automated:
            record["automated"] = True
        return record


class TaskBoard(models.Model):
    """A show's to-do board."""

    show = models.ForeignKey(
        Show, on_delete=models.CASCADE, related_name="task_boards"
    )
    name = models.CharField(max_length=200)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "pk"]

    def __str__(self):
        return self.name


class TaskList(models.Model):
    """A column on a task board."""

    board = models.ForeignKey(
        TaskBoard, on_delete=models.CASCADE, related_name="lists"
    )
    name = models.CharField(max_length=100)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["order", "pk"]

    def __str__(self):
        return f"{self.board.name} / {self.name}"


class TaskCard(models.Model):
    """A to-do item on a task board, optionally linked to a prop."""

    PRIORITY_CHOICES = [
        ("low", "Low Priority"),
        ("medium", "Medium Priority"),
        ("high", "High Priority"),
        ("urgent", "Urgent"),
    ]

    STATUS_CHOICES = [
        ("not_started", "Not Started"),
        ("in_progress", "In Progress"),
        ("blocked", "Blocked"),
        ("done", "Done"),
    ]

    task_list = models.ForeignKey(
        TaskList, on_delete=models.CASCADE, related_name="cards"
    )
    prop = models.ForeignKey(
        Prop,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="task_cards",
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    assigned_to = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="assigned_cards",
    )
    priority = models.CharField(
        max_length=10, choices=PRIORITY_CHOICES, default="medium"
    )
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default="not_started"
    )
    labels = models.JSONField(default=list, blank=True)
    completed = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_cards",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["order", "-created_at"]
        indexes = [
            models.Index(
                fields=["prop", "completed"],
                name="idx_card_prop_completed",
            ),
        ]

    def __str__(self):
        return self.title

    @property
    def board(self):
        return self.task_list.board


class Notification(models.Model):
    """An in-app notification for one user."""

    TYPE_CHOICES = [
        ("prop_status_update", "Prop Status Update"),
        ("prop_needs_maintenance", "Prop Needs Maintenance"),
        ("prop_needs_repair", "Prop Needs Repair"),
        ("task_assigned", "Task Assigned"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    type = models.CharField(max_length=40, choices=TYPE_CHOICES)
    title = models.CharField(max_length=255)
    message = models.TextField()
    prop = models.ForeignKey(
        Prop,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications",
    )
    show = models.ForeignKey(
        Show,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications",
    )
    task_card = models.ForeignKey(
        TaskCard,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
    )
    metadata = models.JSONField(default=dict, blank=True)
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["user", "read"], name="idx_notification_user_read"
            ),
        ]

    def __str__(self):
        return f"{self.title} -> {self.user}"

    def as_payload(self) -> dict:
        """Serialise for the live notification push."""
        return {
            "id": self.pk,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "propId": self.prop_id,
            "showId": self.show_id,
            "taskId": self.task_card_id,
            "createdAt": self.created_at.isoformat(),
            "read": self.read,
        }
