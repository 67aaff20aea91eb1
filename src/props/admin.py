"""Admin configuration for the props app using django-unfold."""

from unfold.admin import ModelAdmin, TabularInline
from unfold.contrib.filters.admin import (
    ChoicesDropdownFilter,
    RelatedDropdownFilter,
)
from unfold.decorators import display

from django.contrib import admin

from .models import (
    Notification,
    Prop,
    PropStatusHistory,
    Show,
    ShowMember,
    TaskBoard,
    TaskCard,
    TaskList,
)
from .statuses import STATUS_PRIORITY

# Unfold label colours keyed by status severity.
PRIORITY_COLOURS = {
    "critical": "danger",
    "high": "danger",
    "medium": "warning",
    "low": "default",
    "info": "info",
    "active": "success",
}

STATUS_LABELS = {
    status.value: PRIORITY_COLOURS[priority]
    for status, priority in STATUS_PRIORITY.items()
}


class ShowMemberInline(TabularInline):
    model = ShowMember
    extra = 1
    fields = ["user", "role", "joined_at"]
    readonly_fields = ["joined_at"]
    autocomplete_fields = ["user"]


class PropStatusHistoryInline(TabularInline):
    model = PropStatusHistory
    extra = 0
    can_delete = False
    fields = [
        "date",
        "previous_status",
        "new_status",
        "updated_by",
        "notes",
        "related_task",
        "notified",
        "is_override",
        "automated",
    ]
    readonly_fields = fields
    ordering = ["-date"]

    def has_add_permission(self, request, obj=None):
        return False


class TaskListInline(TabularInline):
    model = TaskList
    extra = 1
    fields = ["name", "order"]


@admin.register(Show)
class ShowAdmin(ModelAdmin):
    list_display = ["name", "display_member_count", "created_at"]
    search_fields = ["name", "description"]
    inlines = [ShowMemberInline]

    @display(description="Team")
    def display_member_count(self, obj):
        return obj.team.count()


@admin.register(Prop)
class PropAdmin(ModelAdmin):
    list_display = [
        "name",
        "show",
        "display_status",
        "category",
        "current_location",
        "last_status_update",
    ]
    list_filter = [
        ("status", ChoicesDropdownFilter),
        ("show", RelatedDropdownFilter),
    ]
    list_filter_submit = True
    search_fields = ["name", "description", "category", "location"]
    # Status changes go through update_prop_status, not the form.
    readonly_fields = ["status", "last_status_update", "updated_at"]
    filter_horizontal = ["assigned_to"]
    inlines = [PropStatusHistoryInline]

    @display(description="Status", label=STATUS_LABELS)
    def display_status(self, obj):
        return obj.status


@admin.register(PropStatusHistory)
class PropStatusHistoryAdmin(ModelAdmin):
    list_display = [
        "prop",
        "previous_status",
        "new_status",
        "updated_by",
        "date",
        "is_override",
        "automated",
    ]
    list_filter = [
        ("new_status", ChoicesDropdownFilter),
        "is_override",
        "automated",
    ]
    search_fields = ["prop__name", "notes", "reason"]
    date_hierarchy = "date"

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(TaskBoard)
class TaskBoardAdmin(ModelAdmin):
    list_display = ["name", "show", "created_at"]
    list_filter = [("show", RelatedDropdownFilter)]
    search_fields = ["name"]
    inlines = [TaskListInline]


@admin.register(TaskList)
class TaskListAdmin(ModelAdmin):
    list_display = ["name", "board", "order"]
    list_filter = [("board", RelatedDropdownFilter)]


@admin.register(TaskCard)
class TaskCardAdmin(ModelAdmin):
    list_display = [
        "title",
        "task_list",
        "prop",
        "display_priority",
        "status",
        "completed",
        "created_at",
    ]
    list_filter = [
        ("priority", ChoicesDropdownFilter),
        ("status", ChoicesDropdownFilter),
        "completed",
    ]
    search_fields = ["title", "description", "prop__name"]
    filter_horizontal = ["assigned_to"]
    readonly_fields = ["created_by", "created_at", "updated_at"]

    @display(
        description="Priority",
        label={
            "low": "default",
            "medium": "info",
            "high": "warning",
            "urgent": "danger",
        },
    )
    def display_priority(self, obj):
        return obj.priority


@admin.register(Notification)
class NotificationAdmin(ModelAdmin):
    list_display = ["title", "user", "type", "read", "created_at"]
    list_filter = [("type", ChoicesDropdownFilter), "read"]
    search_fields = ["title", "message", "user__username"]
    readonly_fields = ["created_at"]
