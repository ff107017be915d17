from __future__ import annotations

from typing import Any, Dict, List


class GenApiError(Exception):
    """Base class for every error raised by the request pipeline."""


class ConfigurationError(GenApiError):
    """A fixed misconfiguration. Retrying cannot fix it, so it is never retried."""


class UnsupportedModelError(ConfigurationError):
    pass


class NotFoundError(ConfigurationError):
    pass


class SchemaNotFoundError(ConfigurationError):
    pass


class TransientModelError(GenApiError):
    """A failure that a later attempt with a modified payload may recover from."""


class ModelCallError(TransientModelError):
    pass


class ResponseParseError(TransientModelError):
    pass


class PayloadParseError(TransientModelError):
    pass


class HookError(TransientModelError):
    pass


class ValidationError(TransientModelError):
    def __init__(self, message: str, kind: str, errors: List[Dict[str, Any]]) -> None:
        super().__init__(message)
        self.kind = kind
        self.errors = errors


class ExhaustedRetriesError(TransientModelError):
    def __init__(self, last_error: BaseException) -> None:
        super().__init__(str(last_error))
        self.last_error = last_error
