"""Prop status update coordinator.

``update_prop_status`` is the only supported way to change a prop's
status. It runs, in order:

1. load the prop (``PropNotFoundError``)
2. validate the transition (``InvalidTransitionError``), before any write
3. upload damage media, skipping failed files
4. save the status and field cleanup, and
5. write the history entry, both in one transaction
   (``StatusPersistenceError``)
6. create a follow-up task and link it to the history entry
7. notify supervisors and the team

Only steps 1, 2 and 4-5 can fail the call. Problems in 3, 6 and 7 are
logged and returned on ``StatusUpdateResult.errors``.
"""

import logging
from dataclasses import dataclass, field

from django.db import DatabaseError, transaction
from django.utils import timezone

from ..exceptions import (
    PropNotFoundError,
    SideEffectError,
    StatusPersistenceError,
)
from ..models import Prop
from ..statuses import PropStatus
from .cleanup import apply_cleanup, cleanup_for
from .history import (
    StatusTransition,
    link_related_task,
    record_notified,
    record_status_change,
)
from .media import upload_media
from .notifications import dispatch_status_notifications
from .state import needs_override, validate_transition
from .workflow import maybe_create_follow_up

logger = logging.getLogger(__name__)


@dataclass
class StatusUpdateResult:
    prop: Prop
    history: object
    task_card: object = None
    recipients: list = field(default_factory=list)
    errors: list = field(default_factory=list)

    @property
    def task_id(self):
        return self.task_card.pk if self.task_card is not None else None

    @property
    def ok(self):
        """True when every side effect succeeded as well."""
        return not self.errors


def _guarded(step, prop, func, *args, **kwargs):
    """Run a side-effect step that returns ``(value, errors)``.

    Unexpected exceptions are logged and folded into the error list so
    the status change is never rolled back by a side effect.
    """
    try:
        return func(*args, **kwargs)
    except Exception as exc:
        logger.exception("%s step failed for prop %s", step, prop.pk)
        return None, [SideEffectError(step, prop.pk, exc)]


def _persist_status(prop, transition, image_urls, video_urls):
    now = timezone.now()
    try:
        with transaction.atomic():
            prop.status = transition.new_status
            prop.last_status_update = now
            update_fields = ["status", "last_status_update", "updated_at"]
            update_fields += apply_cleanup(
                prop, cleanup_for(transition.new_status)
            )
            prop.save(update_fields=update_fields)
            history = record_status_change(
                prop,
                transition,
                damage_image_urls=image_urls,
                damage_video_urls=video_urls,
                date=now,
            )
    except DatabaseError as exc:
        prop.refresh_from_db()
        raise StatusPersistenceError(
            f"Failed to save status '{transition.new_status}' for prop "
            f"{prop.pk}: {exc}"
        ) from exc
    return history


def _link_task(prop, history, task_card):
    try:
        with transaction.atomic():
            link_related_task(history, task_card)
    except DatabaseError as exc:
        logger.warning(
            "Failed to link task %s to status history %s for prop %s: %s",
            task_card.pk,
            history.pk,
            prop.pk,
            exc,
        )
        return [SideEffectError("workflow", prop.pk, exc, "history link")]
    return []


def _record_recipients(prop, history, recipients):
    try:
        with transaction.atomic():
            record_notified(history, recipients)
    except DatabaseError as exc:
        logger.warning(
            "Failed to record notified users on status history %s for "
            "prop %s: %s",
            history.pk,
            prop.pk,
            exc,
        )
        return [
            SideEffectError("notification", prop.pk, exc, "history record")
        ]
    return []


def update_prop_status(
    prop_id,
    new_status,
    actor,
    notes: str = "",
    reason: str = "",
    images=None,
    videos=None,
    notify_team: bool = True,
    allow_override: bool = False,
    storage=None,
) -> StatusUpdateResult:
    """Change a prop's status and run the follow-up side effects.

    ``allow_override`` skips the transition table for administrative
    fixes; such entries are flagged ``is_override`` in the history.
    ``images``/``videos`` are file objects to attach as damage media.
    """
    try:
        prop = Prop.objects.get(pk=prop_id)
    except Prop.DoesNotExist:
        raise PropNotFoundError(prop_id) from None

    previous_status = prop.status
    validate_transition(previous_status, new_status, allow_override)
    new_status = PropStatus(new_status).value

    transition = StatusTransition(
        prop_id=prop.pk,
        previous_status=previous_status,
        new_status=new_status,
        updated_by=actor,
        notes=notes or "",
        reason=reason or "",
        is_override=allow_override
        and needs_override(previous_status, new_status),
    )

    errors = []
    image_urls, upload_errors = upload_media(
        prop.pk, images, "images", storage
    )
    errors.extend(upload_errors)
    video_urls, upload_errors = upload_media(
        prop.pk, videos, "videos", storage
    )
    errors.extend(upload_errors)

    # Notifications go to whoever held the prop before cleanup.
    assigned_users = list(prop.assigned_to.all())

    history = _persist_status(prop, transition, image_urls, video_urls)
    if transition.is_override:
        logger.warning(
            "Status override on prop %s: %s -> %s by %s",
            prop.pk,
            previous_status,
            new_status,
            actor,
        )

    task_card, workflow_errors = _guarded(
        "workflow",
        prop,
        maybe_create_follow_up,
        prop,
        previous_status,
        new_status,
        notes=transition.notes,
        created_by=actor,
    )
    errors.extend(workflow_errors)
    if task_card is not None:
        errors.extend(_link_task(prop, history, task_card))

    recipients, notify_errors = _guarded(
        "notification",
        prop,
        dispatch_status_notifications,
        prop,
        previous_status,
        new_status,
        actor,
        notes=transition.notes,
        notify_team=notify_team,
        assigned_users=assigned_users,
    )
    errors.extend(notify_errors)
    if recipients:
        errors.extend(_record_recipients(prop, history, recipients))

    logger.info(
        "Prop %s status %s -> %s (history %s, task %s, %d notified, "
        "%d side-effect errors)",
        prop.pk,
        previous_status,
        new_status,
        history.pk,
        getattr(task_card, "pk", None),
        len(recipients or []),
        len(errors),
    )
    return StatusUpdateResult(
        prop=prop,
        history=history,
        task_card=task_card,
        recipients=recipients or [],
        errors=errors,
    )
