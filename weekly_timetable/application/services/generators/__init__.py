"""配置戦略"""

from .lesson_placement_service import LessonPlacementService
from .synchronized_group_service import SynchronizedGroupPlacementService

__all__ = ['LessonPlacementService', 'SynchronizedGroupPlacementService']
