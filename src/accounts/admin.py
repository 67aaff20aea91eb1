"""Admin configuration for accounts app."""

from unfold.admin import ModelAdmin
from unfold.decorators import display
from unfold.forms import (
    AdminPasswordChangeForm,
    UserChangeForm,
    UserCreationForm,
)

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin, ModelAdmin):
    form = UserChangeForm
    add_form = UserCreationForm
    change_password_form = AdminPasswordChangeForm
    model = CustomUser
    list_display = [
        "display_user",
        "email",
        "display_staff",
        "is_active",
    ]
    list_filter = ["is_active", "is_staff", "is_superuser"]
    search_fields = [
        "username",
        "email",
        "display_name",
        "first_name",
        "last_name",
    ]
    fieldsets = (
        (
            "Profile",
            {
                "classes": ["tab"],
                "fields": (
                    "username",
                    "password",
                    "display_name",
                    "first_name",
                    "last_name",
                    "email",
                    "phone_number",
                ),
            },
        ),
        (
            "Notifications",
            {
                "classes": ["tab"],
                "fields": ("notification_preferences",),
            },
        ),
        (
            "Permissions",
            {
                "classes": ["tab"],
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                ),
            },
        ),
    )

    @display(description="User", ordering="username")
    def display_user(self, obj):
        return obj.get_display_name()

    @display(description="Staff", boolean=True)
    def display_staff(self, obj):
        return obj.is_staff
