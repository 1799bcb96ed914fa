"""Error taxonomy for the evaluation core.

InputError        bad document / too little text. Surfaced, never retried.
ProviderError     network, timeout or malformed provider output. The caller
                  moves on to the next provider, then to a local fallback.
ResourceError     camera/microphone unavailable. Recovered by degrading.
PersistenceError  store read/write failure. Surfaced, in-memory result kept.
"""

from typing import Any


class EvaluationError(Exception):
    """Base class for every error raised by the evaluation core."""


# --- Input -----------------------------------------------------------------

class InputError(EvaluationError):
    pass


class EmptyDocumentError(InputError):
    pass


class CorruptDocumentError(InputError):
    pass


class InsufficientTextError(InputError):
    pass


# --- Providers -------------------------------------------------------------

class ProviderError(EvaluationError):
    def __init__(self, message: str, provider: str = "") -> None:
        super().__init__(message)
        self.provider = provider


class ProviderTimeoutError(ProviderError):
    pass


class ProvidersExhaustedError(ProviderError):
    """Every provider in a chain failed. ``failures`` maps name -> error."""

    def __init__(self, failures: dict[str, Exception]) -> None:
        names = ", ".join(failures) or "none configured"
        super().__init__(f"All providers failed ({names})")
        self.failures = failures


# --- Resources / persistence -------------------------------------------------

class ResourceError(EvaluationError):
    pass


class PersistenceError(EvaluationError):
    def __init__(self, message: str, result: Any = None) -> None:
        super().__init__(message)
        self.result = result


# --- Pipeline / interview --------------------------------------------------

class StageError(EvaluationError):
    """A pipeline stage failed. ``str()`` reads ``"<stage> failed: <cause>"``."""

    def __init__(self, stage: str, cause: Exception) -> None:
        super().__init__(f"{stage} failed: {cause}")
        self.stage = stage
        self.cause = cause

    @property
    def is_input_error(self) -> bool:
        return isinstance(self.cause, InputError)


class InvalidTransitionError(EvaluationError):
    pass
