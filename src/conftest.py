"""Shared pytest fixtures for propflow tests."""

import pytest

from django.conf import settings

from props.factories import (
    PropFactory,
    ShowFactory,
    ShowMemberFactory,
    TaskBoardFactory,
    TaskListFactory,
    UserFactory,
)

# Use local filesystem storage for tests (avoids S3 credential errors)
settings.STORAGES["default"] = {
    "BACKEND": "django.core.files.storage.FileSystemStorage",
}
settings.STORAGES["staticfiles"] = {
    "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
}

# Run Celery tasks synchronously in tests
settings.CELERY_TASK_ALWAYS_EAGER = True
settings.CELERY_TASK_EAGER_PROPAGATES = True

# Use in-memory cache for tests (avoids Redis connection errors)
settings.CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Use in-memory channel layer for tests (avoids Redis for WS tests)
settings.CHANNEL_LAYERS = {
    "default": {
        "BACKEND": "channels.layers.InMemoryChannelLayer",
    }
}


@pytest.fixture(autouse=True)
def _clear_cache():
    """Clear the in-memory cache before each test."""
    from django.core.cache import cache

    cache.clear()


@pytest.fixture(autouse=True)
def _media_root(settings, tmp_path):
    """Keep uploaded damage media out of the source tree."""
    settings.MEDIA_ROOT = str(tmp_path / "media")


@pytest.fixture
def password():
    return "testpass123!"


@pytest.fixture
def user(db, password):
    return UserFactory(
        username="testuser",
        email="test@example.com",
        password=password,
        display_name="Test User",
    )


@pytest.fixture
def admin_user(db, password):
    return UserFactory(
        username="admin",
        email="admin@example.com",
        password=password,
        is_staff=True,
        is_superuser=True,
    )


@pytest.fixture
def admin_client(client, admin_user, password):
    client.login(username=admin_user.username, password=password)
    return client


# ---------------------------------------------------------------------------
# Show, team and props
# ---------------------------------------------------------------------------


@pytest.fixture
def show(db):
    return ShowFactory(name="The Tempest")


@pytest.fixture
def supervisor(show):
    """Props supervisor on the show's team."""
    member = ShowMemberFactory(
        show=show,
        user=UserFactory(username="supervisor", display_name="Sam Super"),
        role="props_supervisor",
    )
    return member.user


@pytest.fixture
def team_member(show):
    member = ShowMemberFactory(
        show=show,
        user=UserFactory(username="teammate", display_name="Terry Team"),
        role="props_team",
    )
    return member.user


@pytest.fixture
def actor(show):
    """Stage manager making status changes."""
    member = ShowMemberFactory(
        show=show,
        user=UserFactory(username="actor", display_name="Alex Actor"),
        role="stage_manager",
    )
    return member.user


@pytest.fixture
def assignee(show):
    """A user holding props, not on the show's team."""
    return UserFactory(username="assignee", display_name="Avery Holder")


@pytest.fixture
def prop(show):
    return PropFactory(show=show, name="Sword", category="Weapons")


@pytest.fixture
def board(show):
    """Task board with a 'To Do' and a 'Repairs' list."""
    board = TaskBoardFactory(show=show, name="Props To Do")
    TaskListFactory(board=board, name="To Do", order=0)
    TaskListFactory(board=board, name="Repairs", order=1)
    return board
