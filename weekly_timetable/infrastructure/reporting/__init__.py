"""レポート出力"""

from .workload_reporter import TeacherWorkloadReporter

__all__ = ['TeacherWorkloadReporter']
