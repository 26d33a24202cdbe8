"""バリデーション機能を提供するミックスイン

設定データの読み込み時に、型・必須キー・値の範囲を検証するための
共通ミックスインです。
"""
from typing import Any, Iterable, List, Optional, Union


class ValidationError(Exception):
    """バリデーションエラー"""
    pass


class ValidationMixin:
    """バリデーション機能を提供するミックスイン

    使用例:
        class ConfigRepository(ValidationMixin):
            def parse(self, data: dict):
                self.validate_type(data, dict, "data")
                self.validate_required_keys(data, ["schoolData"])
    """

    def validate_type(
        self,
        value: Any,
        expected_type: Union[type, tuple],
        name: str
    ) -> Any:
        """値の型を検証

        Raises:
            ValidationError: 型が一致しない場合
        """
        # bool は int のサブクラスなので明示的に除外する
        if isinstance(value, bool) and expected_type is int:
            raise ValidationError(f"{name}はint型である必要があります。実際の型: bool")
        if not isinstance(value, expected_type):
            type_name = (
                expected_type.__name__
                if hasattr(expected_type, '__name__')
                else " / ".join(t.__name__ for t in expected_type)
            )
            raise ValidationError(
                f"{name}は{type_name}型である必要があります。"
                f"実際の型: {type(value).__name__}"
            )
        return value

    def validate_range(
        self,
        value: Union[int, float],
        min_value: Optional[Union[int, float]] = None,
        max_value: Optional[Union[int, float]] = None,
        name: str = "value"
    ) -> Union[int, float]:
        """数値の範囲を検証

        Raises:
            ValidationError: 範囲外の場合
        """
        if min_value is not None and value < min_value:
            raise ValidationError(
                f"{name}は{min_value}以上である必要があります。"
                f"実際の値: {value}"
            )
        if max_value is not None and value > max_value:
            raise ValidationError(
                f"{name}は{max_value}以下である必要があります。"
                f"実際の値: {value}"
            )
        return value

    def validate_in_choices(
        self,
        value: Any,
        choices: Iterable[Any],
        name: str = "value"
    ) -> Any:
        """値が選択肢に含まれることを検証"""
        choices = list(choices)
        if value not in choices:
            raise ValidationError(
                f"{name}は次の選択肢から選ぶ必要があります: {choices}。"
                f"実際の値: {value}"
            )
        return value

    def validate_required_keys(
        self,
        data: dict,
        required_keys: List[str],
        name: str = "data"
    ) -> dict:
        """必須キーの存在を検証

        Raises:
            ValidationError: 必須キーが存在しない場合
        """
        missing_keys = [key for key in required_keys if key not in data]
        if missing_keys:
            raise ValidationError(
                f"{name}に必須キーが不足しています: {missing_keys}"
            )
        return data
