"""ドメインサービス"""

from .slot_calendar import SlotCalendar
from .placement_validator import PlacementValidator
from .search_order import FixedSearchOrder, RandomSearchOrder

__all__ = [
    'SlotCalendar',
    'PlacementValidator',
    'FixedSearchOrder',
    'RandomSearchOrder'
]
