"""Exception hierarchy for s3disk."""


class DiskError(Exception):
    """Base exception for all s3disk errors."""

    pass


class ValidationError(DiskError):
    """Raised when validation fails."""

    pass


class ConfigurationError(ValidationError):
    """Raised when a disk is configured without a required field."""

    pass


class ConnectionInitError(DiskError):
    """Raised when the object store client cannot be constructed."""

    pass


class RemoteCallError(DiskError):
    """Raised when a call against the object store fails."""

    pass


class TraversalError(RemoteCallError):
    """Raised when a recursive directory walk is aborted."""

    pass


class TimezoneError(DiskError):
    """Raised when the configured timezone cannot be resolved."""

    pass


class SourceFileError(DiskError, OSError):
    """Raised when an upload source file cannot be read."""

    pass


class OperationCancelledError(DiskError):
    """Raised when the bound operation context has been cancelled."""

    pass


class DeadlineExceededError(OperationCancelledError):
    """Raised when the bound operation context has passed its deadline."""

    pass
