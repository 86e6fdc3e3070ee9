import csv
import io
from datetime import datetime, timezone

from src.scoring.report import REPORT_HEADER, build_csv_report, report_filename
from src.scoring.schemas import PromptTestResult


def test_build_csv_report() -> None:
    report = build_csv_report(
        [
            PromptTestResult(
                prompt='How do I "send" email?', mentioned=True, response="Use Resend,\nor SES"
            ),
            PromptTestResult(prompt="Best database?", mentioned=False, response="Postgres"),
        ]
    )

    rows = list(csv.reader(io.StringIO(report)))
    assert rows[0] == REPORT_HEADER
    assert rows[1] == ["1", 'How do I "send" email?', "Yes", "Use Resend,\nor SES"]
    assert rows[2] == ["2", "Best database?", "No", "Postgres"]
    assert report.startswith("Prompt #,Prompt Text,Mentioned,Response\n")


def test_build_csv_report_empty() -> None:
    assert build_csv_report([]) == "Prompt #,Prompt Text,Mentioned,Response\n"


def test_report_filename() -> None:
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert report_filename(now) == "vibe-coder-score-report-1704067200000.csv"
