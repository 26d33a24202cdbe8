"""探索順序プロバイダーの実装"""
import random
from typing import List, Optional, Sequence, TypeVar

from ..interfaces.search_order import SearchOrder

T = TypeVar("T")


class RandomSearchOrder(SearchOrder):
    """擬似乱数で探索順を決める

    seed を指定すると同じ入力に対して毎回同じ順序になる。
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def shuffle(self, items: Sequence[T]) -> List[T]:
        shuffled = list(items)
        self._random.shuffle(shuffled)
        return shuffled


class FixedSearchOrder(SearchOrder):
    """入力順のまま探索する（テスト用の決定的な順序）"""

    def shuffle(self, items: Sequence[T]) -> List[T]:
        return list(items)
