"""アプリケーションサービス"""

from .phase_orchestrator import GenerationResult, PhaseOrchestrator

__all__ = ['GenerationResult', 'PhaseOrchestrator']
