"""リポジトリ層"""
from .json_config_repository import JsonConfigRepository, TimetableConfig
from .schedule_io import CSVTimetableWriter, ScheduleWriter

__all__ = ['JsonConfigRepository', 'TimetableConfig', 'CSVTimetableWriter', 'ScheduleWriter']
