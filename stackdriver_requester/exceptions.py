class RequesterConfigError(ValueError):
    """Base exception for invalid requester configuration.

    The decision functions themselves never raise; only the configuration
    layer that feeds them reports bad input.
    """

    def __init__(self, message: str, field: str | None = None):
        """Initialize the configuration error.

        Args:
            message: The error message.
            field: Name of the offending setting, when known.
        """
        super().__init__(message)
        self.message = message
        self.field = field


class UnknownAlignerError(RequesterConfigError):
    """Raised when an aligner token is not a Cloud Monitoring aligner."""

    def __init__(self, value: str):
        """Initialize an unknown aligner error."""
        super().__init__(f"Unknown per-series aligner: {value!r}", field="aligner")
        self.value = value
