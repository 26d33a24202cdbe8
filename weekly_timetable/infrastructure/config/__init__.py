"""設定関連"""

from .logging_config import LoggingConfig, get_logger, get_schedule_logger

__all__ = ['LoggingConfig', 'get_logger', 'get_schedule_logger']
