"""Prop status transition validation."""

from ..exceptions import InvalidTransitionError
from ..statuses import VALID_TRANSITIONS, PropStatus


def allowed_transitions(status) -> tuple:
    """Return the statuses reachable from ``status``."""
    return VALID_TRANSITIONS.get(status, ())


def check_transition(
    previous, new, allow_override: bool = False
) -> tuple[bool, tuple]:
    """Return ``(ok, allowed)`` for a proposed status change.

    Same-status updates are always fine, as is anything when
    ``allow_override`` is set (administrative paths). ``allowed`` is
    the full set reachable from ``previous`` either way.
    """
    allowed = allowed_transitions(previous)
    if previous == new or allow_override:
        return True, allowed
    return new in allowed, allowed


def validate_transition(previous, new, allow_override: bool = False) -> None:
    """Validate and raise if the status transition is not allowed.

    Raises InvalidTransitionError carrying the allowed alternatives.
    """
    if new not in PropStatus.values:
        raise ValueError(f"'{new}' is not a valid prop status.")

    ok, allowed = check_transition(previous, new, allow_override)
    if not ok:
        raise InvalidTransitionError(previous, new, allowed)


def needs_override(previous, new) -> bool:
    """Whether ``previous -> new`` is only possible via an override."""
    return previous != new and new not in allowed_transitions(previous)
