"""Exception types shared by the client and the feedback API."""


class SupportCentreError(Exception):
    """Base error for support centre operations."""


class ValidationError(SupportCentreError):
    """Rejected input: bad vote value, empty or oversized comment."""


class StorageFailure(SupportCentreError):
    """Backing store call failed or could not be completed."""
