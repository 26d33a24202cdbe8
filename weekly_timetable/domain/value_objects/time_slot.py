"""時間枠・教科・教員・クラスを表す値オブジェクト

設定ファイル上の文字列識別子は読み込み時に一度だけこれらの型へ変換し、
以降の台帳・時間割のキーとして使用する。
"""
from dataclasses import dataclass

from .division import Division
from ...shared.mixins.validation_mixin import ValidationError


def _require_name(kind: str, name) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"Invalid {kind} name: {name!r}")


@dataclass(frozen=True)
class TimeSlot:
    """時間枠（曜日・校時）を表す不変オブジェクト"""

    day: str
    period: int

    def __post_init__(self):
        _require_name("day", self.day)
        if isinstance(self.period, bool) or not isinstance(self.period, int):
            raise ValidationError(f"Invalid period: {self.period!r}")

    def __str__(self) -> str:
        return f"{self.day}{self.period}限"

    def __format__(self, format_spec: str) -> str:
        """f-string内での表示をサポート"""
        return str(self)


@dataclass(frozen=True)
class Subject:
    """教科を表す値オブジェクト"""

    name: str

    def __post_init__(self):
        _require_name("subject", self.name)

    def __str__(self) -> str:
        return self.name

    def __format__(self, format_spec: str) -> str:
        return str(self)


@dataclass(frozen=True)
class Teacher:
    """教員を表す値オブジェクト"""

    name: str

    def __post_init__(self):
        _require_name("teacher", self.name)

    def __str__(self) -> str:
        return self.name

    def __format__(self, format_spec: str) -> str:
        return str(self)


@dataclass(frozen=True)
class ClassReference:
    """クラス参照を表す値オブジェクト（例: "4B", "7 Red"）"""

    name: str

    def __post_init__(self):
        _require_name("class", self.name)

    @property
    def division(self) -> Division:
        """クラス名の学年から導出した学部"""
        return Division.from_class_name(self.name)

    def __str__(self) -> str:
        return self.name

    def __format__(self, format_spec: str) -> str:
        return str(self)
