"""Notification fan-out for prop status changes.

Recipients are resolved from the show roster and the prop's assignees.
Each notification is queued as its own Celery task so one bad recipient
never holds up the rest; queueing failures are logged and returned as
``SideEffectError`` values instead of being raised.
"""

import logging

from django.conf import settings
from django.db import DatabaseError

from ..exceptions import SideEffectError
from ..models import ShowMember
from ..statuses import PropStatus, is_repair_family, label_for
from ..tasks import deliver_notification

logger = logging.getLogger(__name__)


def summarise_notes(notes: str, limit: int | None = None) -> str:
    """Trim free-text notes for a one-line notification summary."""
    if limit is None:
        limit = getattr(settings, "PROP_NOTE_SUMMARY_LENGTH", 100)
    notes = (notes or "").strip()
    if len(notes) <= limit:
        return notes
    return f"{notes[:limit]}..."


def load_roster(show_id) -> tuple[list, list]:
    """Return ``(supervisors, others)`` users on the show's team."""
    supervisors, others = [], []
    members = ShowMember.objects.filter(show_id=show_id).select_related(
        "user"
    )
    for member in members:
        if member.is_supervisor:
            supervisors.append(member.user)
        else:
            others.append(member.user)
    return supervisors, others


def find_supervisors(show_id) -> list:
    supervisors, _ = load_roster(show_id)
    return supervisors


def _user_id(user):
    return getattr(user, "pk", user)


def resolve_recipients(
    new_status,
    updated_by,
    supervisors,
    others,
    assigned_users,
    notify_team=True,
) -> dict:
    """Work out who gets which notification.

    Returns ``{"supervisors": [...], "team": [...]}``. Supervisors are
    alerted for the repair family even when ``notify_team`` is False.
    The acting user is never included.
    """
    actor_id = _user_id(updated_by)
    alerted, seen = [], {actor_id}

    if is_repair_family(new_status):
        for user in supervisors:
            if user.pk not in seen:
                seen.add(user.pk)
                alerted.append(user)

    team = []
    if notify_team is not False:
        for user in [*supervisors, *others, *assigned_users]:
            if user.pk in seen:
                continue
            seen.add(user.pk)
            if user.wants_notification("prop_status_updates"):
                team.append(user)

    return {"supervisors": alerted, "team": team}


def queue_notification(
    user,
    type,
    title,
    message,
    prop,
    task_card=None,
    metadata=None,
):
    """Queue one notification. Returns a SideEffectError or None."""
    try:
        deliver_notification.delay(
            user_id=user.pk,
            type=type,
            title=title,
            message=message,
            prop_id=prop.pk,
            show_id=prop.show_id,
            task_card_id=getattr(task_card, "pk", None),
            metadata=metadata or {},
        )
    except Exception as exc:
        logger.warning(
            "Failed to send %s notification for prop %s to user %s: %s",
            type,
            prop.pk,
            user.pk,
            exc,
        )
        return SideEffectError(
            "notification", prop.pk, exc, detail=f"user {user.pk}"
        )
    return None


def _supervisor_message(prop, new_status, notes):
    if new_status == PropStatus.UNDER_MAINTENANCE:
        kind, title = "prop_needs_maintenance", "Prop Needs Maintenance"
    else:
        kind, title = "prop_needs_repair", "Prop Needs Repair"
    summary = summarise_notes(notes)
    details = f"Details: {summary}" if summary else "Action required."
    message = (
        f'Prop "{prop.name or "Unnamed Prop"}" has been marked as '
        f"{label_for(new_status)}. {details}"
    )
    return kind, title, message


def _team_message(prop, previous_status, new_status):
    message = (
        f'"{prop.name or "Unnamed Prop"}" changed from '
        f"{label_for(previous_status)} to {label_for(new_status)}."
    )
    return "prop_status_update", "Prop Status Updated", message


def dispatch_status_notifications(
    prop,
    previous_status,
    new_status,
    updated_by,
    notes="",
    notify_team=True,
    assigned_users=None,
) -> tuple[list, list]:
    """Notify supervisors and the team about a status change.

    ``assigned_users`` should be captured before cleanup clears the
    assignment. Returns ``(recipient_ids, errors)``.
    """
    errors = []
    try:
        supervisors, others = load_roster(prop.show_id)
    except DatabaseError as exc:
        logger.warning(
            "Failed to load show team for prop %s notifications: %s",
            prop.pk,
            exc,
        )
        errors.append(SideEffectError("notification", prop.pk, exc))
        supervisors, others = [], []

    if assigned_users is None:
        assigned_users = list(prop.assigned_to.all())

    plan = resolve_recipients(
        new_status,
        updated_by,
        supervisors,
        others,
        assigned_users,
        notify_team=notify_team,
    )
    metadata = {
        "propName": prop.name,
        "previousStatus": previous_status,
        "status": new_status,
        "notes": notes or "",
        "updatedBy": _user_id(updated_by),
    }

    sends = []
    if plan["supervisors"]:
        content = _supervisor_message(prop, new_status, notes)
        sends.extend((user, content) for user in plan["supervisors"])
    if plan["team"]:
        content = _team_message(prop, previous_status, new_status)
        sends.extend((user, content) for user in plan["team"])

    recipients = []
    for user, (kind, title, message) in sends:
        error = queue_notification(
            user, kind, title, message, prop, metadata=metadata
        )
        if error is None:
            recipients.append(user.pk)
        else:
            errors.append(error)

    return recipients, errors
