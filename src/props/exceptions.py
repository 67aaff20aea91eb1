"""Errors raised by the prop status lifecycle."""

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db import DatabaseError

from .statuses import label_for


class PropNotFoundError(ObjectDoesNotExist):
    """The prop being updated does not exist."""

    def __init__(self, prop_id):
        self.prop_id = prop_id
        super().__init__(f"Prop {prop_id} does not exist.")


class InvalidTransitionError(ValidationError):
    """A status change rejected by the transition table.

    ``allowed`` holds the statuses reachable from ``previous`` so callers
    can tell the user which options are valid.
    """

    def __init__(self, previous, new, allowed):
        self.previous = previous
        self.new = new
        self.allowed = tuple(allowed)
        options = ", ".join(label_for(s) for s in self.allowed) or "none"
        super().__init__(
            f"Cannot change status from '{label_for(previous)}' to "
            f"'{label_for(new)}'. Valid options are: {options}.",
            code="invalid_transition",
        )


class StatusPersistenceError(DatabaseError):
    """Writing the new status or its history entry failed."""


class SideEffectError(Exception):
    """A non-fatal failure in an upload, workflow or notification step.

    Never raised to callers of ``update_prop_status``; collected on the
    result and logged where it happened.
    """

    def __init__(self, step, prop_id, cause, detail=""):
        self.step = step
        self.prop_id = prop_id
        self.cause = cause
        self.detail = detail
        message = f"{step} failed for prop {prop_id}: {cause}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
