import logging
from collections.abc import Mapping
from datetime import date, datetime

from smartattend.constants import DEFAULT_METHOD, STATUSES, STATUS_PRESENT
from smartattend.errors import ValidationError, UnknownStudent
from smartattend.models import AttendanceEntry, AttendanceSession

logger = logging.getLogger(__name__)


def as_iso_date(day):
    """Normalise a date, datetime or ISO string to a YYYY-MM-DD string."""
    if isinstance(day, datetime):
        return day.date().isoformat()
    if isinstance(day, date):
        return day.isoformat()
    try:
        return date.fromisoformat(str(day)).isoformat()
    except ValueError as e:
        raise ValidationError(f"Invalid date: {day}") from e


class AttendanceLedger:
    """Append/replace-by-date log of attendance sessions.

    Sessions keep commit order. Student references are plain ids checked
    against the roster at commit time only, so later roster edits never
    touch recorded history.
    """

    def __init__(self, roster, sessions=None):
        self.roster = roster
        self._sessions = list(sessions or [])

    def __len__(self):
        return len(self._sessions)

    def all_sessions(self):
        return list(self._sessions)

    def session_for_date(self, day):
        day = as_iso_date(day)
        for session in self._sessions:
            if session.date == day:
                return session
        return None

    def records_for_student(self, student_id):
        return [
            record
            for session in self._sessions
            for record in session.records
            if record.student_id == student_id
        ]

    def _build_entries(self, proposed_entries, timestamp):
        entries = []
        seen = set()
        for proposal in proposed_entries:
            if not isinstance(proposal, Mapping):
                raise ValidationError(f"Attendance entry must be a mapping, got {type(proposal).__name__}")
            student_id = proposal.get("student_id")
            # bools are ints and 1.0 == 1, neither may stand in for a student id
            if isinstance(student_id, bool) or not isinstance(student_id, int):
                raise ValidationError(f"Invalid student id: {student_id!r}")
            student = self.roster.find_by_id(student_id)
            if student is None:
                raise UnknownStudent(student_id)
            if student_id in seen:
                raise ValidationError(f"Student {student_id} appears more than once")
            seen.add(student_id)

            status = proposal.get("status")
            if status not in STATUSES:
                raise ValidationError(f"Invalid status for student {student_id}: {status}")

            try:
                confidence = float(proposal.get("confidence") or 0)
            except (TypeError, ValueError) as e:
                raise ValidationError(f"Invalid confidence for student {student_id}") from e
            if not 0 <= confidence <= 100:
                raise ValidationError(f"Confidence out of range for student {student_id}: {confidence}")

            entries.append(AttendanceEntry(
                student_id=student_id,
                student_name=student.name,
                status=status,
                timestamp=timestamp,
                confidence=confidence if status == STATUS_PRESENT else 0,
            ))
        return entries

    def commit_session(self, day, proposed_entries, method=DEFAULT_METHOD, now=None):
        day = as_iso_date(day)
        timestamp = (now or datetime.now()).isoformat()

        # nothing below mutates until every entry has been validated
        entries = self._build_entries(proposed_entries, timestamp)

        session = AttendanceSession(
            date=day,
            records=entries,
            timestamp=timestamp,
            method=method,
        )
        self._sessions = [s for s in self._sessions if s.date != day]
        self._sessions.append(session)
        logger.info(
            "Committed session for %s: %d present, %d absent",
            day, len(session.present_records), len(session.absent_records)
        )
        return session

    def to_list(self):
        return [s.to_dict() for s in self._sessions]

    def load(self, data):
        self._sessions = [AttendanceSession.from_dict(item) for item in data or []]

    @classmethod
    def from_list(cls, roster, data):
        ledger = cls(roster)
        ledger.load(data)
        return ledger
