"""Denormalised fields cleared when a prop enters a status."""

from ..statuses import PropStatus

CLEAR_CHECKOUT = {"checked_out_details": None}
CLEAR_ASSIGNMENT = {"assigned_to": ()}

CLEANUP_RULES = {
    PropStatus.AVAILABLE_IN_STORAGE: CLEAR_CHECKOUT,
    PropStatus.CHECKED_OUT: CLEAR_ASSIGNMENT,
    PropStatus.MISSING: {**CLEAR_ASSIGNMENT, **CLEAR_CHECKOUT},
    PropStatus.CUT: {**CLEAR_ASSIGNMENT, **CLEAR_CHECKOUT},
    PropStatus.READY_FOR_DISPOSAL: {**CLEAR_ASSIGNMENT, **CLEAR_CHECKOUT},
}


def cleanup_for(new_status) -> dict:
    """Return ``{field: cleared_value}`` for fields to reset on entry.

    Statuses without a rule return an empty dict.
    """
    return dict(CLEANUP_RULES.get(new_status, {}))


def apply_cleanup(prop, cleanup: dict) -> list[str]:
    """Apply ``cleanup`` to ``prop`` in memory.

    Returns the concrete field names to pass to ``save(update_fields=...)``.
    Many-to-many fields are cleared immediately since they are not part of
    the row update.
    """
    update_fields = []
    for field, value in cleanup.items():
        if field == "assigned_to":
            prop.assigned_to.set(value)
        else:
            setattr(prop, field, value)
            update_fields.append(field)
    return update_fields
