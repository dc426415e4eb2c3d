# usagechart/errors.py


class UsageError(Exception):
    """Base class for failures reported to the caller of an aggregation."""


class InvalidTargetDate(UsageError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid target date: {value!r} (expected yyyy-MM-dd)")


class SourceUnavailable(UsageError):
    """The session list could not be obtained (missing, unreadable or undecodable)."""
