"""時間割生成システムのカスタム例外定義

配置エンジン自体は制約違反で例外を投げない（拒否理由を返すだけ）。
ここで定義する例外は、設定の読み込みや明らかなプログラミングエラーを
呼び出し側に伝えるためのもの。
"""


class TimetableGenerationError(Exception):
    """時間割生成の基底例外クラス"""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DataLoadingError(TimetableGenerationError):
    """データ読み込み失敗時の例外"""
    def __init__(self, message: str, file_path: str = None, details: dict = None):
        super().__init__(message, details)
        self.file_path = file_path


class ConfigurationError(TimetableGenerationError):
    """設定が無効な場合の例外"""
    def __init__(self, message: str, config_key: str = None, details: dict = None):
        super().__init__(message, details)
        self.config_key = config_key


class ScheduleAssignmentError(TimetableGenerationError):
    """スケジュール割り当て失敗時の例外（同じセルへの二重書き込みなど）"""
    def __init__(self, message: str, time_slot=None, class_ref=None, subject=None, details: dict = None):
        super().__init__(message, details)
        self.time_slot = time_slot
        self.class_ref = class_ref
        self.subject = subject
