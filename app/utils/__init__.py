from .responses import (
    ok,
    error,
    internal_error_response,
    validation_error_response,
    redirect_with_message,
)
from .validation import collect_errors
from .db import transactional

__all__ = [
    'ok',
    'error',
    'internal_error_response',
    'validation_error_response',
    'redirect_with_message',
    'collect_errors',
    'transactional',
]
