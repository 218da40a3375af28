"""
Lab Label Service Errors
"""


class LabelServiceError(Exception):
    """Base class for all service errors."""

    status_code = 500


class MalformedPayloadError(LabelServiceError):
    """The inbound record has no usable lab request list."""

    status_code = 400


class NoContainersError(LabelServiceError):
    """No lab request resolved a container (only raised when configured)."""

    status_code = 422


class SpoolerError(LabelServiceError):
    """The operating system print subsystem rejected a job."""


class UnsupportedLanguageError(LabelServiceError):
    """No handler exists for the requested printer language."""

    status_code = 400
