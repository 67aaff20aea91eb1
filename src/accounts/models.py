"""Custom user model for propflow."""

from django.contrib.auth.models import AbstractUser
from django.db import models

# Opt-out notification categories. A missing key means the user
# receives that category.
NOTIFICATION_PREFERENCE_KEYS = (
    "prop_status_updates",
    "task_assigned",
)


class CustomUser(AbstractUser):
    """Extended user with display name, phone, and notification settings."""

    display_name = models.CharField(
        max_length=255,
        blank=True,
        help_text="Human-readable name shown on status history and tasks",
    )
    phone_number = models.CharField(
        max_length=20,
        blank=True,
        help_text="Contact number for following up on missing props",
    )
    email = models.EmailField("email address", blank=False, unique=True)
    notification_preferences = models.JSONField(
        default=dict,
        blank=True,
        help_text=(
            "Opt-out flags keyed by category, e.g. "
            '{"prop_status_updates": false}'
        ),
    )

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"

    def get_display_name(self):
        """Return display_name if set, otherwise full name or username."""
        if self.display_name:
            return self.display_name
        full = self.get_full_name()
        return full if full else self.username

    def wants_notification(self, category):
        """Return whether this user receives ``category`` notifications."""
        prefs = self.notification_preferences or {}
        return prefs.get(category) is not False

    def __str__(self):
        return self.get_display_name()
