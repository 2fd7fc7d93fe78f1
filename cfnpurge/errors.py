"""
Error types raised by cfnpurge.
"""

from typing import List, Optional


class CfnPurgeError(Exception):
    """Base class for all cfnpurge errors."""


class RemoteError(CfnPurgeError):
    """A remote call failed (authorization, validation, transport)."""

    def __init__(self, code: str, message: str, operation: Optional[str] = None):
        self.code = code
        self.message = message
        self.operation = operation
        super().__init__(str(self))

    def __str__(self) -> str:
        prefix = f"{self.operation} failed" if self.operation else "remote call failed"
        return f"{prefix} ({self.code}): {self.message}"

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "operation": self.operation}


class CascadePurgeError(CfnPurgeError):
    """
    One or more repositories could not be fully emptied.

    Raised only after every repository was attempted. The stack is left in place.
    """

    def __init__(self, result):
        self.result = result
        self.failures = list(result.failures)
        super().__init__(self._format())

    @property
    def repositories(self) -> List[str]:
        return [f.repository for f in self.failures]

    def _format(self) -> str:
        names = ", ".join(self.repositories)
        return (
            f"failed to delete images of {names}; "
            f"stack {self.result.stack_name} was NOT deleted"
        )
