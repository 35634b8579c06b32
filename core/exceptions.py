"""Exception hierarchy shared by all modules."""


class ServiceError(Exception):
    """Base exception for all service errors."""

    pass


class ValidationError(ServiceError):
    """Required input is missing or empty."""

    pass


class ExtractionError(ServiceError):
    """Document could not be read or yielded no text."""

    pass


class LLMServiceError(ServiceError):
    """Generative-text service call failed."""

    pass


class UpstreamTimeoutError(LLMServiceError):
    """Generative-text service did not answer in time."""

    pass


class SynthesisStreamError(ServiceError):
    """Speech stream failed before completing."""

    pass
