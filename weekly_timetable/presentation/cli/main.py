"""CLIメインインターフェース"""
import argparse
import sys
from pathlib import Path

from ...application.use_cases.generate_timetable import GenerateTimetableUseCase
from ...application.use_cases.request_models import GenerateTimetableRequest, GenerateTimetableResult
from ...domain.exceptions import TimetableGenerationError
from ...infrastructure.config.logging_config import LoggingConfig
from ...infrastructure.reporting.workload_reporter import TeacherWorkloadReporter
from ...shared.mixins.logging_mixin import LoggingMixin

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNPLACED = 2

DEFAULT_CONFIG = Path("data/config/school_data.json")


class TimetableCLI(LoggingMixin):
    """時間割生成システムのCLIインターフェース"""

    def __init__(self):
        super().__init__()
        self.setup_logging()

    def setup_logging(self):
        """ログ設定"""
        LoggingConfig.setup_production_logging()

    def run(self, args=None) -> int:
        """CLIメイン実行"""
        parser = self.create_parser()
        parsed_args = parser.parse_args(args)

        if parsed_args.verbose:
            LoggingConfig.setup_development_logging()
        elif parsed_args.quiet:
            LoggingConfig.setup_quiet_logging()

        if parsed_args.command == "generate":
            return self.handle_generate_command(parsed_args)
        parser.print_help()
        return EXIT_ERROR

    def create_parser(self) -> argparse.ArgumentParser:
        """コマンドライン引数パーサーを作成"""
        parser = argparse.ArgumentParser(
            description="週間時間割自動生成システム",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
使用例:
  %(prog)s generate                                    # data/config/school_data.json から生成
  %(prog)s generate --config my_school.json --seed 42  # シードを固定して再現可能に生成
  %(prog)s generate --output-dir data/output           # CSVを出力

終了コード:
  0: 全ての必要時数を配置
  2: 未配置あり（unplaced.csv を確認）
  1: 設定ファイルの読み込みエラー
            """
        )

        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="詳細なログを出力"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="エラーのみ出力"
        )

        subparsers = parser.add_subparsers(dest="command", help="利用可能なコマンド")

        generate_parser = subparsers.add_parser(
            "generate",
            help="時間割を生成"
        )
        generate_parser.add_argument(
            "--config",
            type=Path,
            default=DEFAULT_CONFIG,
            help=f"学校データ・制約の設定ファイル (デフォルト: {DEFAULT_CONFIG})"
        )
        generate_parser.add_argument(
            "--output-dir",
            type=Path,
            default=None,
            help="CSVの出力先ディレクトリ（省略時は出力しない）"
        )
        generate_parser.add_argument(
            "--seed",
            type=int,
            default=None,
            help="探索順の乱数シード"
        )

        return parser

    def handle_generate_command(self, args) -> int:
        """時間割生成コマンドを処理"""
        self.print_header()

        request = GenerateTimetableRequest(
            config_file=args.config,
            output_dir=args.output_dir,
            seed=args.seed
        )
        try:
            result = GenerateTimetableUseCase().execute(request)
        except TimetableGenerationError as e:
            self.log_error(f"実行エラー: {e}")
            if e.details:
                self.log_error(f"  詳細: {e.details}")
            return EXIT_ERROR

        self.print_generation_result(result)
        return EXIT_OK if result.success else EXIT_UNPLACED

    def print_header(self, title: str = "週間時間割生成システム"):
        print("=" * 60)
        print(title)
        print("=" * 60)

    def print_generation_result(self, result: GenerateTimetableResult):
        """生成結果を表示"""
        generation = result.result
        print(f"\n{result.message}")
        print(f"実行時間: {result.execution_time:.2f}秒")

        if generation.unplaced:
            print("\n【未配置】")
            for entry in generation.unplaced:
                print(f"  - {entry}")

        days = generation.schedule.days
        print("\n【教員負荷】")
        for line in TeacherWorkloadReporter().format_summary(generation.teacher_loads, days):
            print(f"  {line}")

        if result.output_files:
            print("\n【出力ファイル】")
            for path in result.output_files.values():
                print(f"  - {path}")


def main():
    """メイン関数"""
    cli = TimetableCLI()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
