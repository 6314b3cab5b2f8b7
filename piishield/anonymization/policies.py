"""Right-to-be-forgotten outcome per PII category."""

from enum import Enum
from typing import Any, Optional

from ..core.exceptions import ConfigurationError
from ..core.types import PIICategory

REDACTED_MARKER = "[REDACTED]"
DELETED_MARKER = "[DELETED]"
LOCATION_DELETED_MARKER = "[LOCATION_DELETED]"


class DeletionAction(Enum):
    """What happens to a column when its owner asks to be forgotten."""

    PSEUDONYMIZE = "pseudonymize"  # placeholder embedding the anonymous id
    DELETE = "delete"
    DELETE_LOCATION = "delete_location"
    CLEAR = "clear"


DELETION_POLICY: dict[PIICategory, DeletionAction] = {
    PIICategory.IDENTIFIER: DeletionAction.PSEUDONYMIZE,
    PIICategory.FINANCIAL: DeletionAction.DELETE,
    PIICategory.HEALTH: DeletionAction.DELETE,
    PIICategory.BIOMETRIC: DeletionAction.DELETE,
    PIICategory.GENETIC: DeletionAction.DELETE,
    PIICategory.LOCATION: DeletionAction.DELETE_LOCATION,
    PIICategory.BEHAVIORAL: DeletionAction.CLEAR,
}


def check_policy_coverage(policy: dict[PIICategory, DeletionAction]) -> None:
    """Raise if any category has no deletion action."""
    missing = [c.value for c in PIICategory if c not in policy]
    if missing:
        raise ConfigurationError(
            f"Deletion policy has no action for categories: {missing}",
            config_section="deletion_policy",
        )


check_policy_coverage(DELETION_POLICY)


def deletion_value(action: DeletionAction, anonymous_id: str) -> Optional[Any]:
    """Replacement value written for ``action``."""
    if action is DeletionAction.PSEUDONYMIZE:
        return f"[DELETED_{anonymous_id}]"
    if action is DeletionAction.DELETE:
        return DELETED_MARKER
    if action is DeletionAction.DELETE_LOCATION:
        return LOCATION_DELETED_MARKER
    if action is DeletionAction.CLEAR:
        return None
    raise ConfigurationError(f"Unhandled deletion action: {action}")
