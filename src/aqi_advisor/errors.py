"""Error taxonomy for a reconciliation pass.

Extraction and parse failures never reach the caller: the engine answers them
with a fallback record. ``MissingCredentialError`` and ``ProviderFaultError``
are fatal and propagate.
"""
from __future__ import annotations

# Heuristic markers for "unknown model" faults, used only when the provider
# error carries no HTTP status.
MODEL_UNAVAILABLE_MARKERS = (
    "not found",
    "not_found",
    "404",
    "does not exist",
    "not available",
)


class AdvisorError(Exception):
    """Base class for engine errors."""


class MissingCredentialError(AdvisorError):
    """The configured provider has no API key."""


class ExtractionFailedError(AdvisorError, ValueError):
    """No JSON span could be located in the model output."""


class ParseFailedError(AdvisorError, ValueError):
    """A JSON span was found but is not valid JSON or lacks the expected shape."""


class ProviderError(AdvisorError):
    """A failure reported by the generative model provider."""

    def __init__(self, message: str, *, model: str, status_code: int | None = None):
        super().__init__(message)
        self.model = model
        self.status_code = status_code


class ModelUnavailableError(ProviderError):
    """The provider does not know the requested model; try the next one."""


class ProviderFaultError(ProviderError):
    """Auth, quota, network or any other non-retryable provider failure."""


def is_model_unavailable_message(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in MODEL_UNAVAILABLE_MARKERS)


def classify_provider_error(
    exc: BaseException, model: str, *, status_code: int | None = None
) -> ProviderError:
    """Map an SDK exception to ``ModelUnavailableError`` or ``ProviderFaultError``.

    A structured HTTP status wins when present (404 means the model is
    unavailable, anything else is a fault). Message matching is only used for
    errors without a status.
    """
    message = str(exc) or exc.__class__.__name__
    if status_code is not None:
        unavailable = status_code == 404
    else:
        unavailable = is_model_unavailable_message(message)

    error_cls = ModelUnavailableError if unavailable else ProviderFaultError
    return error_cls(message, model=model, status_code=status_code)
