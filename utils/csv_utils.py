# utils/csv_utils.py
import csv
import io

from utils.results import EMPTY_EXPORT_SET, Result

CSV_HEADER = ["Student Name", "Student ID", "Time", "Date", "Session Code"]


def export_filename(date: str) -> str:
    return f"attendance-{date.replace('/', '-')}.csv"


def export_csv(records, date):
    """
    Build the CSV document for one date. Returns a Result whose value is
    (filename, text), or an EmptyExportSet failure when nothing matches.
    """
    rows = [r for r in records if r.date == date]
    if not rows:
        return Result.failure(EMPTY_EXPORT_SET)

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in rows:
        writer.writerow([r.student_name, r.student_id, r.timestamp, r.date, r.session_code or "N/A"])
    return Result.success((export_filename(date), buf.getvalue()))
