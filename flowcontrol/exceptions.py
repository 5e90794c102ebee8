"""Exceptions for the flowcontrol adapter."""


class FlowControlError(Exception):
    """Base exception for flowcontrol errors."""


class FlowControlConnectionError(FlowControlError):
    """Raised when the device cannot be reached."""


class FlowControlDataError(FlowControlError):
    """Raised when the device answers with an unusable payload."""


class FlowControlConfigError(FlowControlError):
    """Raised for invalid adapter configuration."""
