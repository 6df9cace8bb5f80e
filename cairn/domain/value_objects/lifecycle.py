from enum import Enum


class Lifecycle(Enum):
    """
    How a resource takes part in a reconciliation pass.

    Values are the names used in manifests.
    """
    SYNC = "Sync"
    IGNORE = "Ignore"
    WARN_IF_INSUFFICIENT_ACCESS = "WarnIfInsufficientAccess"
    EXISTS_AND_VALIDATES = "ExistsAndValidates"
    EXISTS_AND_WARN_IF_CHANGES = "ExistsAndWarnIfChanges"

    @property
    def requires_existing(self) -> bool:
        return self in (
            Lifecycle.EXISTS_AND_VALIDATES,
            Lifecycle.EXISTS_AND_WARN_IF_CHANGES,
        )

    @staticmethod
    def parse(value: str) -> "Lifecycle":
        for member in Lifecycle:
            if value in (member.value, member.name):
                return member
        raise ValueError(f"Unknown lifecycle: {value!r}")
