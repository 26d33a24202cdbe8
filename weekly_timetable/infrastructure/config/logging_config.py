"""ロギング設定の統一管理

このモジュールは、システム全体のロギング設定を一元管理します。
"""
import json
import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional


class LoggingConfig:
    """ロギング設定クラス"""

    LEVELS = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }

    # モジュール別のログレベル設定（setup_logging のデフォルトレベルより優先）
    MODULE_LEVELS = {
        'weekly_timetable.application': 'INFO',
        'weekly_timetable.domain.services': 'WARNING',  # 1コマごとのdebugログは通常出さない
        'weekly_timetable.infrastructure': 'INFO',
    }

    @classmethod
    def setup_logging(cls,
                      log_level: str = 'INFO',
                      log_file: Optional[Path] = None,
                      console_output: bool = True,
                      simple_format: bool = False,
                      module_levels: bool = True) -> None:
        """ロギングを設定

        Args:
            log_level: デフォルトのログレベル
            log_file: ログファイルのパス（Noneの場合はファイル出力なし）
            console_output: コンソール出力を有効にするか
            simple_format: シンプルなフォーマットを使用するか
            module_levels: MODULE_LEVELS のモジュール別レベルを適用するか
        """
        root_logger = logging.getLogger()
        root_logger.setLevel(cls.LEVELS.get(log_level, logging.INFO))
        root_logger.handlers.clear()

        if simple_format:
            formatter = logging.Formatter('%(levelname)s: %(message)s')
        else:
            formatter = ContextFormatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

        if console_output:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            root_logger.addHandler(console_handler)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        for module_name, level_name in cls.MODULE_LEVELS.items():
            module_logger = logging.getLogger(module_name)
            if module_levels:
                module_logger.setLevel(cls.LEVELS.get(level_name, logging.INFO))
            else:
                module_logger.setLevel(logging.NOTSET)

    @classmethod
    def setup_production_logging(cls) -> None:
        """本番環境用のロギング設定"""
        cls.setup_logging(
            log_level='WARNING',
            console_output=True,
            simple_format=True
        )

    @classmethod
    def setup_development_logging(cls, log_file: Optional[Path] = None) -> None:
        """開発環境用のロギング設定（全モジュールDEBUG）"""
        cls.setup_logging(
            log_level='DEBUG',
            log_file=log_file,
            console_output=True,
            simple_format=False,
            module_levels=False
        )

    @classmethod
    def setup_quiet_logging(cls) -> None:
        """静音モード（エラーのみ）"""
        cls.setup_logging(
            log_level='ERROR',
            console_output=True,
            simple_format=True,
            module_levels=False
        )


class ContextFormatter(logging.Formatter):
    """コンテキスト情報を含むカスタムフォーマッター"""

    def format(self, record):
        formatted = super().format(record)

        context = getattr(record, 'context', None)
        if context:
            context_str = json.dumps(context, ensure_ascii=False, default=str)
            formatted += f"\n  Context: {context_str}"

        if record.levelno >= logging.ERROR and hasattr(record, 'error_details'):
            details = json.dumps(record.error_details, ensure_ascii=False, default=str)
            formatted += f"\n  Error Details: {details}"

        return formatted


class ScheduleGenerationLogger:
    """時間割生成専用のロガーラッパー"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.context: Dict[str, Any] = {}

    def _extra(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        if self.context or kwargs:
            return {'context': {**self.context, **kwargs}}
        return {}

    def set_context(self, **kwargs):
        """ログコンテキストを設定"""
        self.context.update(kwargs)

    def clear_context(self):
        """ログコンテキストをクリア"""
        self.context.clear()

    def debug(self, message: str, **kwargs):
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(message, extra=self._extra(kwargs))

    def info(self, message: str, **kwargs):
        """情報ログ（コンテキスト付き）"""
        self.logger.info(message, extra=self._extra(kwargs))

    def warning(self, message: str, **kwargs):
        """警告ログ（コンテキスト付き）"""
        self.logger.warning(message, extra=self._extra(kwargs))

    def error(self, message: str, error_details: Dict[str, Any] = None, **kwargs):
        """エラーログ（詳細情報付き）"""
        extra = self._extra(kwargs)
        extra['error_details'] = error_details or {}
        self.logger.error(message, extra=extra, exc_info=True)

    def phase_start(self, phase_name: str, **kwargs):
        """フェーズ開始ログ"""
        self.set_context(phase=phase_name)
        self.info(f"=== {phase_name} 開始 ===", **kwargs)

    def phase_end(self, phase_name: str, success: bool = True, **kwargs):
        """フェーズ終了ログ"""
        status = "完了" if success else "未配置あり"
        self.info(f"=== {phase_name} {status} ===", **kwargs)
        self.clear_context()


def get_logger(name: str) -> logging.Logger:
    """統一されたロガーを取得"""
    return logging.getLogger(name)


def get_schedule_logger(name: str) -> ScheduleGenerationLogger:
    """時間割生成専用ロガーを取得

    Args:
        name: ロガー名（通常は__name__）
    """
    return ScheduleGenerationLogger(get_logger(name))
