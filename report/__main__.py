"""
CLI 入口

用法:
    # 使用預設值 / 環境變數
    python -m report

    # 指定輸入與輸出
    python -m report --results-dir allure-results --output out/report.pdf

環境變數:
    ALLURE_RESULTS_DIR  結果目錄 (預設 ./allure-results)
    OUTPUT_FILE         PDF 輸出路徑 (預設 test-report.pdf)
    REPORT_TITLE        報告標題 (預設 "E2E Test Report")
    BASE_URL            受測環境標籤 (預設 http://localhost:3000)
    ATTACHMENT_LINKING  explicit / positional
    MALFORMED_POLICY    strict / skip
"""

import argparse
import sys

from config.config import LINKING_MODES, Config
from core.exceptions import KitError
from report.pipeline import generate_report
from utils.logger import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m report",
        description="從 allure-results 產生 PDF 測試報告",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
範例:
  python -m report                                 # 使用預設值
  python -m report --results-dir allure-results    # 指定結果目錄
  OUTPUT_FILE=out.pdf python -m report             # 用環境變數指定輸出
""",
    )
    parser.add_argument("--results-dir", help="allure 結果目錄")
    parser.add_argument("--output", help="PDF 輸出路徑（已存在會直接覆寫）")
    parser.add_argument("--title", help="報告標題")
    parser.add_argument("--env-label", help="受測環境標籤")
    parser.add_argument(
        "--linking", choices=LINKING_MODES,
        help="截圖對應方式 (預設 explicit)",
    )
    parser.add_argument(
        "--skip-malformed", action="store_true",
        help="略過格式錯誤的結果紀錄（預設遇到即失敗）",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Config.report_settings(
            results_dir=args.results_dir,
            output_file=args.output,
            title=args.title,
            env_label=args.env_label,
            linking=args.linking,
            malformed_policy="skip" if args.skip_malformed else None,
        )
        outcome = generate_report(settings)
    except KitError as e:
        logger.error(f"報告產生失敗: {e}")
        print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
        return 1

    s = outcome.summary
    print(f"\n✅ PDF Report generated: {outcome.output}")
    print("\n📊 Summary:")
    print(f"   Total Tests: {s.total}")
    print(f"   Passed: {s.passed}")
    print(f"   Failed: {s.failed}")
    print(f"   Skipped: {s.skipped}")
    print(f"   Pass Rate: {s.pass_rate}%")
    return 0


if __name__ == "__main__":
    sys.exit(main())
