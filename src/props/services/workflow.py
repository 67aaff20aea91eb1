"""Automatic follow-up tasks for damaged, under-maintenance and missing props.

When a prop enters one of the follow-up statuses a card is added to the
show's task board, unless the prop already has an open card. Lookup and
write failures degrade to "no task created"; they never block the status
change that triggered them.

The open-card check and the insert are separate queries, so two
concurrent updates to the same prop can both pass the check. This is
accepted: the check is best-effort, not a uniqueness guarantee.
"""

import logging

from django.db import DatabaseError, transaction

from ..exceptions import SideEffectError
from ..models import TaskBoard, TaskCard
from ..statuses import PropStatus, requires_follow_up
from .notifications import find_supervisors, queue_notification

logger = logging.getLogger(__name__)

S = PropStatus

REPAIR_LABELS = ["repair", "maintenance", "prop"]
MISSING_LABELS = ["missing", "prop"]

# status -> (title, opening line, priority)
TASK_TEMPLATES = {
    S.DAMAGED_AWAITING_REPLACEMENT: (
        "Replace damaged prop: {name}",
        'Prop "{name}" has been marked as damaged and needs replacement.',
        "high",
    ),
    S.DAMAGED_AWAITING_REPAIR: (
        "Repair damaged prop: {name}",
        'Prop "{name}" has been marked as damaged and needs repair.',
        "high",
    ),
    S.OUT_FOR_REPAIR: (
        "Track repair: {name}",
        'Prop "{name}" is out for external repair. '
        "Track progress and return.",
        "medium",
    ),
    S.UNDER_MAINTENANCE: (
        "Maintenance required: {name}",
        'Prop "{name}" requires maintenance.',
        "medium",
    ),
    S.MISSING: (
        "Locate missing prop: {name}",
        'Prop "{name}" has been marked as missing. '
        "Please locate it and update its status.",
        "high",
    ),
}

NEXT_STEPS = {
    "repair": [
        "Review the prop and assess what needs to be fixed",
        "Assign this task to a maker to action the repair/maintenance",
        "Update task status as work progresses",
        "Update prop status when repair/maintenance is complete",
    ],
    "missing": [
        "Check the prop's storage location and recent scenes",
        "Ask the team who last had the prop",
        "Update prop status once it is found",
    ],
}


def find_task_board(show_id):
    """Return the show's task board, or None if it has none."""
    return TaskBoard.objects.filter(show_id=show_id).first()


def open_cards_for_prop(prop):
    return TaskCard.objects.filter(prop=prop, completed=False)


def choose_task_list(board):
    """Prefer a 'repair' list, then a 'to do' list, else the first list."""
    lists = list(board.lists.all())
    for needle in ("repair", "to do"):
        for task_list in lists:
            if needle in task_list.name.lower():
                return task_list
    return lists[0] if lists else None


def build_card_content(prop, new_status, notes="") -> dict:
    """Render title, description, priority and labels for a status."""
    name = prop.name or "Unnamed"
    title, intro, priority = TASK_TEMPLATES[new_status]
    is_missing = new_status == S.MISSING

    lines = [intro.format(name=name), "", "**Prop Details:**"]
    lines.append(f"- Name: {name}")
    if prop.category:
        lines.append(f"- Category: {prop.category}")
    if prop.location:
        lines.append(f"- Location: {prop.location}")
    if notes:
        lines.extend(["", "**Issue Description:**", notes.strip()])
    lines.extend(["", "**Next Steps:**"])
    steps = NEXT_STEPS["missing" if is_missing else "repair"]
    lines.extend(f"{i}. {step}" for i, step in enumerate(steps, start=1))
    lines.extend(["", f"Linked: [@{name}](prop:{prop.pk})"])

    return {
        "title": title.format(name=name),
        "description": "\n".join(lines),
        "priority": priority,
        "labels": list(MISSING_LABELS if is_missing else REPAIR_LABELS),
    }


def _pick_assignee(prop):
    """First supervisor on the show's team, or None."""
    try:
        supervisors = find_supervisors(prop.show_id)
    except DatabaseError as exc:
        logger.warning(
            "Failed to get props supervisor for prop %s task: %s",
            prop.pk,
            exc,
        )
        return None
    return supervisors[0] if supervisors else None


def _should_notify_assignee(assignee, created_by):
    if assignee is None:
        return False
    # The user who made the change is never notified about it.
    if assignee.pk == getattr(created_by, "pk", created_by):
        return False
    return assignee.wants_notification("task_assigned")


def maybe_create_follow_up(
    prop, previous_status, new_status, notes="", created_by=None
) -> tuple:
    """Create a follow-up card for ``prop`` if its new status needs one.

    Returns ``(card, errors)``; ``card`` is None when nothing was created.
    """
    if not requires_follow_up(new_status):
        return None, []

    try:
        board = find_task_board(prop.show_id)
        if board is None:
            logger.warning(
                "No task board for show %s; skipping follow-up task "
                "for prop %s",
                prop.show_id,
                prop.pk,
            )
            return None, []
        if open_cards_for_prop(prop).exists():
            logger.info(
                "Prop %s already has an open task; not creating another",
                prop.pk,
            )
            return None, []
        task_list = choose_task_list(board)
    except DatabaseError as exc:
        logger.warning(
            "Task board lookup failed for prop %s: %s", prop.pk, exc
        )
        return None, [SideEffectError("workflow", prop.pk, exc)]

    if task_list is None:
        logger.warning(
            "Task board %s has no lists; skipping follow-up task for "
            "prop %s",
            board.pk,
            prop.pk,
        )
        return None, []

    assignee = _pick_assignee(prop)
    content = build_card_content(prop, new_status, notes)
    try:
        with transaction.atomic():
            card = TaskCard.objects.create(
                task_list=task_list,
                prop=prop,
                created_by=created_by,
                status="not_started",
                completed=False,
                order=0,
                **content,
            )
            if assignee is not None:
                card.assigned_to.add(assignee)
    except DatabaseError as exc:
        logger.warning(
            "Failed to create %s task for prop %s: %s",
            new_status,
            prop.pk,
            exc,
        )
        return None, [SideEffectError("workflow", prop.pk, exc)]

    logger.info(
        "Auto-created task card %s for %s prop %s on board %s",
        card.pk,
        new_status,
        prop.pk,
        board.pk,
    )

    errors = []
    if _should_notify_assignee(assignee, created_by):
        if new_status == S.MISSING:
            title = "New Missing Prop Task"
            message = (
                f"A task has been created to locate {prop.name}. "
                "Please review and assign it."
            )
        else:
            title = "New Repair/Maintenance Task"
            message = (
                f"A new task has been created for {prop.name}. "
                "Please review and assign to a maker."
            )
        error = queue_notification(
            assignee,
            "task_assigned",
            title,
            message,
            prop,
            task_card=card,
            metadata={"boardId": board.pk, "taskId": card.pk},
        )
        if error is not None:
            errors.append(error)

    return card, errors
