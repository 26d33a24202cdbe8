"""ユースケース層"""
from .generate_timetable import GenerateTimetableUseCase
from .request_models import GenerateTimetableRequest, GenerateTimetableResult

__all__ = ['GenerateTimetableUseCase', 'GenerateTimetableRequest', 'GenerateTimetableResult']
