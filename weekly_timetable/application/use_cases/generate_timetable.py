"""時間割生成ユースケース（読み込み・生成・保存の協調層）"""
import time
from pathlib import Path
from typing import Dict

from .request_models import GenerateTimetableRequest, GenerateTimetableResult
from ..services.phase_orchestrator import GenerationResult, PhaseOrchestrator
from ...domain.services.search_order import RandomSearchOrder
from ...infrastructure.reporting.workload_reporter import TeacherWorkloadReporter
from ...infrastructure.repositories.json_config_repository import JsonConfigRepository, TimetableConfig
from ...infrastructure.repositories.schedule_io.csv_writer import CSVTimetableWriter
from ...shared.mixins.logging_mixin import LoggingMixin

TIMETABLE_FILE = "timetable.csv"
UNPLACED_FILE = "unplaced.csv"
WORKLOAD_FILE = "teacher_workload.csv"


class GenerateTimetableUseCase(LoggingMixin):
    """時間割生成のユースケース

    1. 設定ファイル読み込み（JsonConfigRepository）
    2. フェーズ順の時間割生成（PhaseOrchestrator）
    3. 時間割・未配置ログ・教員負荷のCSV保存（output_dir 指定時のみ）

    設定の読み込みエラーは DataLoadingError / ConfigurationError として
    呼び出し側に伝える。未配置が残っても例外にはしない。
    """

    def __init__(self,
                 config_repository: JsonConfigRepository = None,
                 timetable_writer: CSVTimetableWriter = None,
                 workload_reporter: TeacherWorkloadReporter = None):
        self.config_repository = config_repository or JsonConfigRepository()
        self.timetable_writer = timetable_writer or CSVTimetableWriter()
        self.workload_reporter = workload_reporter or TeacherWorkloadReporter()

    def execute(self, request: GenerateTimetableRequest) -> GenerateTimetableResult:
        start_time = time.time()
        self.log_operation_start("時間割生成", {"config": str(request.config_file), "seed": request.seed})

        config = self.config_repository.load(Path(request.config_file))
        orchestrator = PhaseOrchestrator(
            config.school, config.calendar, config.constraints,
            search_order=RandomSearchOrder(request.seed)
        )
        result = orchestrator.generate()

        output_files = {}
        if request.output_dir is not None:
            output_files = self._save_outputs(result, config, Path(request.output_dir))

        execution_time = time.time() - start_time
        success = result.is_complete
        if success:
            message = "全ての必要時数を配置しました"
        else:
            message = f"未配置が{len(result.unplaced)}件あります（計{result.unplaced_periods}コマ）"

        self.log_operation_end("時間割生成", success, {"unplaced": len(result.unplaced)})
        self.log_performance("時間割生成", execution_time)
        return GenerateTimetableResult(
            result=result,
            success=success,
            message=message,
            execution_time=execution_time,
            output_files=output_files
        )

    def _save_outputs(self, result: GenerationResult, config: TimetableConfig,
                      output_dir: Path) -> Dict[str, Path]:
        output_dir.mkdir(parents=True, exist_ok=True)
        files = {
            "timetable": output_dir / TIMETABLE_FILE,
            "unplaced": output_dir / UNPLACED_FILE,
            "teacher_workload": output_dir / WORKLOAD_FILE,
        }
        self.timetable_writer.write(result.schedule, config.calendar, config.school, files["timetable"])
        self.timetable_writer.write_unplaced(result.unplaced, files["unplaced"])
        self.workload_reporter.write(result.teacher_loads, config.calendar.days, files["teacher_workload"])
        return files
