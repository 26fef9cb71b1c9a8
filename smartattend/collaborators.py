import logging
import random
from abc import ABC, abstractmethod
from datetime import datetime

from smartattend.constants import STATUS_PRESENT, STATUS_ABSENT
from smartattend.models import AbsenteeNotice

logger = logging.getLogger(__name__)


class CaptureCollaborator(ABC):
    """Produces a session proposal: dicts with student_id, status and confidence."""

    @abstractmethod
    def propose_session(self, day):
        raise NotImplementedError


class NotificationCollaborator(ABC):
    @abstractmethod
    def notify_absentees(self, notices):
        """Deliver the notices and return how many were sent."""
        raise NotImplementedError


class SimulatedRecognizer(CaptureCollaborator):
    """Stand-in for the class-photo recognizer.

    Roughly 80% of the roster is "detected", one or two of those may go
    unrecognized, and each recognized student is still marked absent
    about 15% of the time. Confidences are percentages with one decimal.
    """

    def __init__(self, roster, rng=None):
        self.roster = roster
        self.rng = rng or random.Random()

    def propose_session(self, day):
        students = self.roster.all()
        if not students:
            logger.warning("No students found, nothing to recognize for %s", day)
            return []

        detected = min(int(len(students) * 0.8), len(students))
        recognized = max(1, detected - self.rng.randint(0, 1))
        confidence = 85 + self.rng.random() * 12

        proposal = []
        for index, student in enumerate(students):
            is_present = index < recognized and self.rng.random() > 0.15
            if is_present:
                level = round(max(75, confidence - self.rng.random() * 15), 1)
                proposal.append({"student_id": student.id, "status": STATUS_PRESENT, "confidence": level})
            else:
                proposal.append({"student_id": student.id, "status": STATUS_ABSENT, "confidence": 0})

        logger.info(
            "Simulated recognition for %s: %d detected, %d recognized, %.1f%% confidence",
            day, detected, recognized, confidence
        )
        return proposal


class LoggingSmsNotifier(NotificationCollaborator):
    def __init__(self, clock=None):
        self.clock = clock or datetime.now

    def notify_absentees(self, notices):
        if not notices:
            logger.info("All students present - no SMS notifications needed")
            return 0

        sent = 0
        time_text = self.clock().strftime("%I:%M %p")
        for notice in notices:
            if not notice.parent_phone:
                continue
            logger.info(
                "SMS sent to %s: %s was absent today at %s.",
                notice.parent_phone, notice.name, time_text
            )
            sent += 1
        return sent


def absentee_notices(session, roster):
    notices = []
    for record in session.absent_records:
        student = roster.find_by_id(record.student_id)
        if student is None or not student.parent_phone:
            continue
        notices.append(AbsenteeNotice(
            student_id=student.id,
            name=student.name,
            parent_phone=student.parent_phone,
            date=session.date,
        ))
    return notices
