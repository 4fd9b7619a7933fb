"""Outcomes an ``on_error`` handler can choose when a config update fails validation."""

from enum import Enum
from typing import Any


class Recovery(Enum):
    """
    Decision returned by an ``on_error`` handler passed to ``Config.set``.

    ALLOW_UNKNOWN re-validates the merged config with unknown keys permitted
    and commits the result. REJECT discards the update: the state stays as it
    was and no error is raised.
    """

    ALLOW_UNKNOWN = "allow_unknown"
    REJECT = "reject"

    @classmethod
    def resolve(cls, result: Any) -> "Recovery":
        """Map a handler's return value to a Recovery; plain truthy/falsy values are accepted."""
        if isinstance(result, cls):
            return result
        return cls.ALLOW_UNKNOWN if result else cls.REJECT
