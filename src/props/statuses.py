"""Prop lifecycle statuses, their labels, severity and legal transitions."""

from django.db import models


class PropStatus(models.TextChoices):
    CONFIRMED = "confirmed", "Confirmed in Show"
    CUT = "cut", "Cut from Show"
    OUT_FOR_REPAIR = "out_for_repair", "Out for Repair"
    DAMAGED_AWAITING_REPAIR = (
        "damaged_awaiting_repair",
        "Damaged - Awaiting Repair",
    )
    DAMAGED_AWAITING_REPLACEMENT = (
        "damaged_awaiting_replacement",
        "Damaged - Awaiting Replacement",
    )
    MISSING = "missing", "Missing"
    IN_TRANSIT = "in_transit", "In Transit"
    UNDER_MAINTENANCE = "under_maintenance", "Under Maintenance"
    LOANED_OUT = "loaned_out", "Loaned Out"
    ON_HOLD = "on_hold", "On Hold"
    UNDER_REVIEW = "under_review", "Under Review"
    BEING_MODIFIED = "being_modified", "Being Modified"
    BACKUP = "backup", "Backup/Alternate"
    TEMPORARILY_RETIRED = "temporarily_retired", "Temporarily Retired"
    READY_FOR_DISPOSAL = "ready_for_disposal", "Ready for Disposal"
    REPAIRED_BACK_IN_SHOW = (
        "repaired_back_in_show",
        "Repaired - Back in Show",
    )
    AVAILABLE_IN_STORAGE = "available_in_storage", "Available in Storage"
    CHECKED_OUT = "checked_out", "Checked Out"
    IN_USE_ON_SET = "in_use_on_set", "In Use on Set"
    ON_ORDER = "on_order", "On Order"
    TO_BUY = "to_buy", "To Buy"


S = PropStatus

# Severity used by UIs to colour and sort props by urgency.
STATUS_PRIORITY = {
    S.MISSING: "critical",
    S.DAMAGED_AWAITING_REPLACEMENT: "high",
    S.DAMAGED_AWAITING_REPAIR: "high",
    S.OUT_FOR_REPAIR: "medium",
    S.UNDER_MAINTENANCE: "medium",
    S.IN_TRANSIT: "medium",
    S.LOANED_OUT: "medium",
    S.BEING_MODIFIED: "medium",
    S.UNDER_REVIEW: "low",
    S.ON_HOLD: "low",
    S.BACKUP: "low",
    S.TEMPORARILY_RETIRED: "low",
    S.READY_FOR_DISPOSAL: "low",
    S.CONFIRMED: "info",
    S.CUT: "info",
    S.REPAIRED_BACK_IN_SHOW: "info",
    S.AVAILABLE_IN_STORAGE: "info",
    S.CHECKED_OUT: "active",
    S.IN_USE_ON_SET: "active",
    S.ON_ORDER: "info",
    S.TO_BUY: "info",
}

# Valid state transitions: from_status -> (to_statuses, ...)
# Every PropStatus must appear as a key (see props.checks).
VALID_TRANSITIONS = {
    S.ON_ORDER: (S.TO_BUY, S.CONFIRMED),
    S.TO_BUY: (S.ON_ORDER, S.CONFIRMED),
    S.CONFIRMED: (
        S.AVAILABLE_IN_STORAGE,
        S.IN_USE_ON_SET,
        S.UNDER_REVIEW,
        S.UNDER_MAINTENANCE,
    ),
    S.AVAILABLE_IN_STORAGE: (
        S.CHECKED_OUT,
        S.IN_USE_ON_SET,
        S.UNDER_MAINTENANCE,
    ),
    S.CHECKED_OUT: (S.IN_USE_ON_SET, S.AVAILABLE_IN_STORAGE),
    S.IN_USE_ON_SET: (
        S.AVAILABLE_IN_STORAGE,
        S.CHECKED_OUT,
        S.UNDER_MAINTENANCE,
    ),
    S.UNDER_MAINTENANCE: (
        S.AVAILABLE_IN_STORAGE,
        S.OUT_FOR_REPAIR,
        S.DAMAGED_AWAITING_REPAIR,
    ),
    S.OUT_FOR_REPAIR: (S.REPAIRED_BACK_IN_SHOW, S.DAMAGED_AWAITING_REPAIR),
    S.DAMAGED_AWAITING_REPAIR: (
        S.REPAIRED_BACK_IN_SHOW,
        S.DAMAGED_AWAITING_REPLACEMENT,
    ),
    S.DAMAGED_AWAITING_REPLACEMENT: (S.ON_ORDER, S.TO_BUY),
    S.REPAIRED_BACK_IN_SHOW: (S.AVAILABLE_IN_STORAGE, S.IN_USE_ON_SET),
    S.MISSING: (S.AVAILABLE_IN_STORAGE, S.UNDER_REVIEW),
    S.IN_TRANSIT: (S.AVAILABLE_IN_STORAGE, S.CHECKED_OUT),
    S.LOANED_OUT: (S.AVAILABLE_IN_STORAGE,),
    S.ON_HOLD: (S.AVAILABLE_IN_STORAGE, S.UNDER_REVIEW),
    S.UNDER_REVIEW: (S.AVAILABLE_IN_STORAGE, S.CONFIRMED, S.CUT),
    S.BEING_MODIFIED: (S.AVAILABLE_IN_STORAGE, S.UNDER_MAINTENANCE),
    S.BACKUP: (S.AVAILABLE_IN_STORAGE, S.CONFIRMED),
    S.TEMPORARILY_RETIRED: (S.AVAILABLE_IN_STORAGE, S.READY_FOR_DISPOSAL),
    S.READY_FOR_DISPOSAL: (S.CUT,),
    S.CUT: (S.CONFIRMED, S.TEMPORARILY_RETIRED),
}

# Statuses that page the props supervisor and open a repair task.
REPAIR_FAMILY = frozenset(
    {
        S.DAMAGED_AWAITING_REPAIR,
        S.DAMAGED_AWAITING_REPLACEMENT,
        S.OUT_FOR_REPAIR,
        S.UNDER_MAINTENANCE,
    }
)

FOLLOW_UP_STATUSES = REPAIR_FAMILY | {S.MISSING}


def label_for(status) -> str:
    """Return the human label for a status value."""
    return PropStatus(status).label


def priority_for(status) -> str:
    return STATUS_PRIORITY[PropStatus(status)]


def is_repair_family(status) -> bool:
    return status in REPAIR_FAMILY


def requires_follow_up(status) -> bool:
    """Whether entering ``status`` should open a follow-up task."""
    return status in FOLLOW_UP_STATUSES
