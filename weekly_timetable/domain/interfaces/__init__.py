"""ドメインインターフェース"""

from .search_order import SearchOrder

__all__ = ['SearchOrder']
