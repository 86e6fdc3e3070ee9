import csv
import io
from datetime import datetime, timezone

from src.scoring.schemas import PromptTestResult

REPORT_HEADER = ["Prompt #", "Prompt Text", "Mentioned", "Response"]


def build_csv_report(prompt_results: list[PromptTestResult]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(REPORT_HEADER)
    for index, result in enumerate(prompt_results, start=1):
        writer.writerow(
            [index, result.prompt, "Yes" if result.mentioned else "No", result.response]
        )
    return buffer.getvalue()


def report_filename(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"vibe-coder-score-report-{int(now.timestamp() * 1000)}.csv"
