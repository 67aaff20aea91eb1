"""Scheduled reversion of repaired props back to 'confirmed'."""

import datetime
import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from ..models import Prop
from ..statuses import PropStatus
from .history import StatusTransition, record_status_change

logger = logging.getLogger(__name__)


def revert_repaired_props(now=None) -> int:
    """Move stale 'repaired_back_in_show' props to 'confirmed'.

    A prop is stale once its last status update is older than
    ``PROP_AUTO_REVERT_HOURS``. At most ``PROP_AUTO_REVERT_BATCH_SIZE``
    props are handled per call. Each gets an automated history entry.
    Returns the number of props reverted.
    """
    now = now or timezone.now()
    hours = getattr(settings, "PROP_AUTO_REVERT_HOURS", 48)
    batch_size = getattr(settings, "PROP_AUTO_REVERT_BATCH_SIZE", 500)
    cutoff = now - datetime.timedelta(hours=hours)

    candidate_ids = list(
        Prop.objects.filter(
            status=PropStatus.REPAIRED_BACK_IN_SHOW,
            last_status_update__lt=cutoff,
        )
        .order_by("last_status_update")
        .values_list("pk", flat=True)[:batch_size]
    )

    reverted = 0
    for prop_id in candidate_ids:
        with transaction.atomic():
            # Re-check under lock: the prop may have moved on since
            # the candidate query ran.
            prop = (
                Prop.objects.select_for_update()
                .filter(
                    pk=prop_id,
                    status=PropStatus.REPAIRED_BACK_IN_SHOW,
                    last_status_update__lt=cutoff,
                )
                .first()
            )
            if prop is None:
                continue
            prop.status = PropStatus.CONFIRMED
            prop.last_status_update = now
            prop.save(
                update_fields=["status", "last_status_update", "updated_at"]
            )
            record_status_change(
                prop,
                StatusTransition(
                    prop_id=prop.pk,
                    previous_status=PropStatus.REPAIRED_BACK_IN_SHOW,
                    new_status=PropStatus.CONFIRMED,
                    notes=(
                        "Status automatically reverted to confirmed after "
                        f"{hours} hours"
                    ),
                ),
                automated=True,
                date=now,
            )
            reverted += 1

    if reverted:
        logger.info("Auto-reverted %d repaired props", reverted)
    return reverted
