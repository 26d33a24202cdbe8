"""探索順序プロバイダーのインターフェース定義"""
from abc import ABC, abstractmethod
from typing import List, Sequence, TypeVar

T = TypeVar("T")


class SearchOrder(ABC):
    """曜日・校時・教科の探索順を決める抽象基底クラス

    実装は入力シーケンスを変更せず、並べ替えた新しいリストを返す。
    """

    @abstractmethod
    def shuffle(self, items: Sequence[T]) -> List[T]:
        """探索順に並べ替えたリストを返す"""
        pass
