"""Status history entry construction."""

from dataclasses import dataclass

from django.utils import timezone

from ..models import PropStatusHistory


@dataclass(frozen=True)
class StatusTransition:
    """A requested status change. Never stored as-is."""

    prop_id: int
    previous_status: str
    new_status: str
    updated_by: object = None
    notes: str = ""
    reason: str = ""
    is_override: bool = False


def build_history_entry(
    prop,
    transition: StatusTransition,
    damage_image_urls=None,
    damage_video_urls=None,
    automated=False,
    date=None,
) -> PropStatusHistory:
    """Build an unsaved history entry for ``transition``, stamped now (UTC)."""
    return PropStatusHistory(
        prop=prop,
        previous_status=transition.previous_status,
        new_status=transition.new_status,
        updated_by=transition.updated_by,
        date=date or timezone.now(),
        notes=(transition.notes or "").strip(),
        reason=(transition.reason or "").strip(),
        damage_image_urls=[u for u in damage_image_urls or [] if u],
        damage_video_urls=[u for u in damage_video_urls or [] if u],
        is_override=transition.is_override,
        automated=automated,
    )


def record_status_change(prop, transition, **extra) -> PropStatusHistory:
    """Build and persist a history entry. Returns the saved entry."""
    entry = build_history_entry(prop, transition, **extra)
    entry.save()
    return entry


def link_related_task(entry: PropStatusHistory, task_card) -> None:
    """Backfill the follow-up task created after ``entry`` was written."""
    entry.related_task = task_card
    entry.save(update_fields=["related_task"])


def record_notified(entry: PropStatusHistory, recipient_ids) -> None:
    """Backfill the ids of users notified about ``entry``."""
    entry.notified = list(recipient_ids)
    entry.save(update_fields=["notified"])
