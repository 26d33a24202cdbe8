"""ロギング機能を提供するミックスイン

クラスにロギング機能を追加するための共通ミックスインです。
"""
import logging
from typing import Any, Dict, Optional


class LoggingMixin:
    """ロギング機能を提供するミックスイン

    使用例:
        class TimetableWriter(LoggingMixin):
            def write(self, path):
                self.logger.info(f"時間割を書き出します: {path}")
    """

    @property
    def logger(self) -> logging.Logger:
        """クラス名付きのロガーを取得"""
        if not hasattr(self, '_logger'):
            self._logger = logging.getLogger(
                f"{self.__class__.__module__}.{self.__class__.__name__}"
            )
        return self._logger

    def log_debug(self, message: str, *args, **kwargs) -> None:
        self.logger.debug(message, *args, **kwargs)

    def log_info(self, message: str, *args, **kwargs) -> None:
        self.logger.info(message, *args, **kwargs)

    def log_warning(self, message: str, *args, **kwargs) -> None:
        self.logger.warning(message, *args, **kwargs)

    def log_error(self, message: str, *args, **kwargs) -> None:
        self.logger.error(message, *args, **kwargs)

    def log_operation_start(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """操作開始のログを出力"""
        message = f"{operation}を開始"
        if details:
            message += f" - {details}"
        self.log_info(message)

    def log_operation_end(
        self,
        operation: str,
        success: bool = True,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """操作終了のログを出力

        Args:
            operation: 操作名
            success: 成功したか（失敗時はWARNINGで出力）
            details: 詳細情報
        """
        status = "成功" if success else "未完了"
        message = f"{operation}が{status}"
        if details:
            message += f" - {details}"

        if success:
            self.log_info(message)
        else:
            self.log_warning(message)

    def log_performance(self, operation: str, elapsed_time: float) -> None:
        """処理時間をログ出力"""
        self.log_info(f"{operation} - 処理時間: {elapsed_time:.3f}秒")
