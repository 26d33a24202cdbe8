"""時間割生成のリクエスト/レスポンスモデル"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from ..services.phase_orchestrator import GenerationResult


@dataclass
class GenerateTimetableRequest:
    """時間割生成リクエスト"""
    config_file: Path
    output_dir: Optional[Path] = None  # None の場合はファイル出力しない
    seed: Optional[int] = None         # 探索順の乱数シード（再現用）


@dataclass
class GenerateTimetableResult:
    """時間割生成結果"""
    result: Optional[GenerationResult]
    success: bool
    message: str
    execution_time: float
    output_files: Dict[str, Path] = field(default_factory=dict)
