"""学部（ディビジョン）を表す値オブジェクト"""
import re
from enum import Enum

_LEADING_YEAR = re.compile(r"\s*(\d+)")


class Division(Enum):
    """同じ週予定・教科時数表を共有する学年のまとまり"""

    LOWER_PRIMARY = "lowerPrimary"      # 1〜3年
    UPPER_PRIMARY = "upperPrimary"      # 4〜6年
    LOWER_SECONDARY = "lowerSecondary"  # それ以外

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_class_name(cls, class_name: str) -> 'Division':
        """クラス名先頭の数値（学年）から学部を判定

        先頭に数字がないクラス名は中等部として扱う。
        """
        match = _LEADING_YEAR.match(class_name)
        if match is None:
            return cls.LOWER_SECONDARY

        year = int(match.group(1))
        if year <= 3:
            return cls.LOWER_PRIMARY
        if year <= 6:
            return cls.UPPER_PRIMARY
        return cls.LOWER_SECONDARY

    @classmethod
    def from_key(cls, key: str) -> 'Division':
        """設定ファイルのキー（"lowerPrimary" など）から変換

        Raises:
            ValueError: 未知の学部名の場合
        """
        return cls(key)
