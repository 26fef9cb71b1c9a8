from datetime import date, timedelta
from typing import List

from smartattend.constants import TREND_DAYS
from smartattend.ledger import as_iso_date
from smartattend.models import Statistics, TrendPoint


def _percent(part, whole):
    if not whole:
        return 0
    return round(part / whole * 100, 1)


def attendance_trend(ledger, today, days=TREND_DAYS) -> List[TrendPoint]:
    """One point per calendar day, oldest first, ending with ``today``."""
    today = date.fromisoformat(as_iso_date(today))
    points = []
    for offset in range(days - 1, -1, -1):
        day = (today - timedelta(days=offset)).isoformat()
        session = ledger.session_for_date(day)
        if session is None:
            points.append(TrendPoint(date=day, present=0, absent=0))
        else:
            points.append(TrendPoint(
                date=day,
                present=len(session.present_records),
                absent=len(session.absent_records),
            ))
    return points


def compute_statistics(roster, ledger, today) -> Statistics:
    total = len(roster)
    stats = Statistics(total_students=total)

    session = ledger.session_for_date(today)
    if session is not None:
        present = session.present_records
        stats.present_today = len(present)
        stats.absent_today = total - len(present)
        stats.attendance_rate = _percent(len(present), total)
        stats.sms_sent_today = len(session.records)
        if present:
            stats.average_confidence = round(
                sum(r.confidence for r in present) / len(present), 1
            )
    else:
        stats.absent_today = total

    stats.total_days = len({s.date for s in ledger.all_sessions()})
    stats.trend = attendance_trend(ledger, today)
    return stats


def student_attendance_rate(ledger, student_id):
    records = ledger.records_for_student(student_id)
    present = sum(1 for r in records if r.is_present)
    return _percent(present, len(records))


def student_summaries(roster, ledger):
    rows = []
    for student in roster.all():
        records = ledger.records_for_student(student.id)
        present = sum(1 for r in records if r.is_present)
        rows.append({
            "id": student.id,
            "name": student.name,
            "roll_no": student.roll_no,
            "class": student.student_class,
            "present": present,
            "total": len(records),
            "rate": _percent(present, len(records)),
        })
    return rows
