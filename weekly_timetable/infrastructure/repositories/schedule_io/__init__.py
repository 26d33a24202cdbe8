"""時間割の入出力"""
from .base import ScheduleWriter
from .csv_writer import CSVTimetableWriter

__all__ = ['ScheduleWriter', 'CSVTimetableWriter']
