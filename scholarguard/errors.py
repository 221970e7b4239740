"""
Typed failures raised by the analysis gateway and the upload helpers.
Routers translate them into HTTP responses.
"""


class AnalysisError(Exception):
    """Base class for every analysis failure surfaced to callers."""


class InputEmptyError(AnalysisError):
    """The caller supplied blank text."""


class MissingCredentialError(AnalysisError):
    """No usable API key is configured, or the upstream rejected it."""


class ResponseFormatError(AnalysisError):
    """The model payload could not be interpreted as the expected shape."""


class UpstreamUnavailableError(AnalysisError):
    """Transient upstream failures persisted after every retry."""


class UpstreamRequestError(AnalysisError):
    """The upstream rejected the request with a non-retryable error."""


class TextExtractionError(Exception):
    """No text could be pulled out of an uploaded file."""
