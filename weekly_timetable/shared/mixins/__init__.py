"""共有ミックスイン"""

from .logging_mixin import LoggingMixin
from .validation_mixin import ValidationError, ValidationMixin

__all__ = [
    'LoggingMixin',
    'ValidationError',
    'ValidationMixin'
]
