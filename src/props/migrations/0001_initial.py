import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [
    ("confirmed", "Confirmed in Show"),
    ("cut", "Cut from Show"),
    ("out_for_repair", "Out for Repair"),
    ("damaged_awaiting_repair", "Damaged - Awaiting Repair"),
    ("damaged_awaiting_replacement", "Damaged - Awaiting Replacement"),
    ("missing", "Missing"),
    ("in_transit", "In Transit"),
    ("under_maintenance", "Under Maintenance"),
    ("loaned_out", "Loaned Out"),
    ("on_hold", "On Hold"),
    ("under_review", "Under Review"),
    ("being_modified", "Being Modified"),
    ("backup", "Backup/Alternate"),
    ("temporarily_retired", "Temporarily Retired"),
    ("ready_for_disposal", "Ready for Disposal"),
    ("repaired_back_in_show", "Repaired - Back in Show"),
    ("available_in_storage", "Available in Storage"),
    ("checked_out", "Checked Out"),
    ("in_use_on_set", "In Use on Set"),
    ("on_order", "On Order"),
    ("to_buy", "To Buy"),
]


def big_auto_id():
    return (
        "id",
        models.BigAutoField(
            auto_created=True,
            primary_key=True,
            serialize=False,
            verbose_name="ID",
        ),
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Show",
            fields=[
                big_auto_id(),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Prop",
            fields=[
                big_auto_id(),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("category", models.CharField(blank=True, max_length=100)),
                (
                    "location",
                    models.CharField(
                        blank=True,
                        help_text="Assigned storage location",
                        max_length=200,
                    ),
                ),
                (
                    "current_location",
                    models.CharField(
                        blank=True,
                        help_text="Where the prop physically is right now",
                        max_length=200,
                    ),
                ),
                (
                    "checked_out_details",
                    models.JSONField(
                        blank=True,
                        help_text=(
                            "Who has the prop and where, while checked out"
                        ),
                        null=True,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=STATUS_CHOICES,
                        default="confirmed",
                        max_length=40,
                    ),
                ),
                (
                    "last_status_update",
                    models.DateTimeField(blank=True, null=True),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "assigned_to",
                    models.ManyToManyField(
                        blank=True,
                        related_name="assigned_props",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "show",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="props",
                        to="props.show",
                    ),
                ),
            ],
            options={
                "ordering": ["-updated_at"],
                "indexes": [
                    models.Index(fields=["status"], name="idx_prop_status"),
                    models.Index(
                        fields=["status", "last_status_update"],
                        name="idx_prop_status_updated",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="TaskBoard",
            fields=[
                big_auto_id(),
                ("name", models.CharField(max_length=200)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "show",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="task_boards",
                        to="props.show",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at", "pk"],
            },
        ),
        migrations.CreateModel(
            name="TaskList",
            fields=[
                big_auto_id(),
                ("name", models.CharField(max_length=100)),
                ("order", models.PositiveIntegerField(default=0)),
                (
                    "board",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lists",
                        to="props.taskboard",
                    ),
                ),
            ],
            options={
                "ordering": ["order", "pk"],
            },
        ),
        migrations.CreateModel(
            name="TaskCard",
            fields=[
                big_auto_id(),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                (
                    "priority",
                    models.CharField(
                        choices=[
                            ("low", "Low Priority"),
                            ("medium", "Medium Priority"),
                            ("high", "High Priority"),
                            ("urgent", "Urgent"),
                        ],
                        default="medium",
                        max_length=10,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("not_started", "Not Started"),
                            ("in_progress", "In Progress"),
                            ("blocked", "Blocked"),
                            ("done", "Done"),
                        ],
                        default="not_started",
                        max_length=20,
                    ),
                ),
                ("labels", models.JSONField(blank=True, default=list)),
                ("completed", models.BooleanField(default=False)),
                ("order", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "assigned_to",
                    models.ManyToManyField(
                        blank=True,
                        related_name="assigned_cards",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="created_cards",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "prop",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="task_cards",
                        to="props.prop",
                    ),
                ),
                (
                    "task_list",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cards",
                        to="props.tasklist",
                    ),
                ),
            ],
            options={
                "ordering": ["order", "-created_at"],
                "indexes": [
                    models.Index(
                        fields=["prop", "completed"],
                        name="idx_card_prop_completed",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PropStatusHistory",
            fields=[
                big_auto_id(),
                (
                    "previous_status",
                    models.CharField(choices=STATUS_CHOICES, max_length=40),
                ),
                (
                    "new_status",
                    models.CharField(choices=STATUS_CHOICES, max_length=40),
                ),
                (
                    "date",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                ("notes", models.TextField(blank=True)),
                ("reason", models.TextField(blank=True)),
                (
                    "damage_image_urls",
                    models.JSONField(blank=True, default=list),
                ),
                (
                    "damage_video_urls",
                    models.JSONField(blank=True, default=list),
                ),
                (
                    "notified",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Ids of users sent a status notification",
                    ),
                ),
                (
                    "is_override",
                    models.BooleanField(
                        default=False,
                        help_text=(
                            "Transition was forced past the transition table"
                        ),
                    ),
                ),
                ("automated", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "prop",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_history",
                        to="props.prop",
                    ),
                ),
                (
                    "related_task",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="status_changes",
                        to="props.taskcard",
                    ),
                ),
                (
                    "updated_by",
                    models.ForeignKey(
                        blank=True,
                        help_text="Empty for automated changes",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="prop_status_changes",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "prop status history",
                "ordering": ["-date", "-pk"],
                "indexes": [
                    models.Index(
                        fields=["date"], name="idx_status_history_date"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Notification",
            fields=[
                big_auto_id(),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("prop_status_update", "Prop Status Update"),
                            (
                                "prop_needs_maintenance",
                                "Prop Needs Maintenance",
                            ),
                            ("prop_needs_repair", "Prop Needs Repair"),
                            ("task_assigned", "Task Assigned"),
                        ],
                        max_length=40,
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("message", models.TextField()),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("read", models.BooleanField(default=False)),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                (
                    "prop",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to="props.prop",
                    ),
                ),
                (
                    "show",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to="props.show",
                    ),
                ),
                (
                    "task_card",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="notifications",
                        to="props.taskcard",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["user", "read"],
                        name="idx_notification_user_read",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ShowMember",
            fields=[
                big_auto_id(),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("god", "God"),
                            ("admin", "Admin"),
                            ("props_supervisor", "Props Supervisor"),
                            ("props_team", "Props Team"),
                            ("stage_manager", "Stage Manager"),
                            ("editor", "Editor"),
                            ("viewer", "Viewer"),
                        ],
                        default="props_team",
                        max_length=30,
                    ),
                ),
                ("joined_at", models.DateTimeField(auto_now_add=True)),
                (
                    "show",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="team",
                        to="props.show",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="show_memberships",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["joined_at", "pk"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("show", "user"),
                        name="unique_member_per_show",
                    ),
                ],
            },
        ),
        migrations.AddField(
            model_name="show",
            name="members",
            field=models.ManyToManyField(
                blank=True,
                related_name="shows",
                through="props.ShowMember",
                to=settings.AUTH_USER_MODEL,
            ),
        ),
    ]
