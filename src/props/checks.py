"""System checks for the prop status tables."""

from django.core.checks import Error, Tags, register

from .statuses import STATUS_PRIORITY, VALID_TRANSITIONS, PropStatus


@register(Tags.models)
def check_status_tables(app_configs=None, **kwargs):
    """Every status needs a transition row and a priority."""
    errors = []
    for status in PropStatus:
        if status not in VALID_TRANSITIONS:
            errors.append(
                Error(
                    f"Status '{status}' has no entry in VALID_TRANSITIONS.",
                    id="props.E001",
                )
            )
        if status not in STATUS_PRIORITY:
            errors.append(
                Error(
                    f"Status '{status}' has no entry in STATUS_PRIORITY.",
                    id="props.E002",
                )
            )
    for source, targets in VALID_TRANSITIONS.items():
        unknown = [t for t in targets if t not in PropStatus.values]
        if unknown:
            errors.append(
                Error(
                    f"Transitions from '{source}' name unknown statuses: "
                    f"{', '.join(unknown)}.",
                    id="props.E003",
                )
            )
    return errors
