import logging
import random
from datetime import datetime

from smartattend.collaborators import (
    LoggingSmsNotifier,
    SimulatedRecognizer,
    absentee_notices,
)
from smartattend.models import AbsenteeNotice
from smartattend.roster import RosterStore

from conftest import NOW


def test_simulated_recognizer_covers_whole_roster(roster):
    proposal = SimulatedRecognizer(roster, rng=random.Random(7)).propose_session("2024-01-10")

    assert [p["student_id"] for p in proposal] == [1, 2, 3, 4]
    for entry in proposal:
        if entry["status"] == "present":
            assert 75 <= entry["confidence"] <= 97
        else:
            assert entry["status"] == "absent"
            assert entry["confidence"] == 0


def test_simulated_recognizer_never_recognizes_undetected_students(roster):
    # 4 students -> 3 detected, so the last one is always absent
    for seed in range(20):
        proposal = SimulatedRecognizer(roster, rng=random.Random(seed)).propose_session("2024-01-10")
        assert proposal[-1]["status"] == "absent"


def test_simulated_recognizer_is_repeatable_with_seed(roster):
    first = SimulatedRecognizer(roster, rng=random.Random(3)).propose_session("2024-01-10")
    second = SimulatedRecognizer(roster, rng=random.Random(3)).propose_session("2024-01-10")
    assert first == second


def test_simulated_recognizer_empty_roster():
    assert SimulatedRecognizer(RosterStore()).propose_session("2024-01-10") == []


def test_simulated_proposal_commits_cleanly(roster, ledger):
    proposal = SimulatedRecognizer(roster, rng=random.Random(11)).propose_session("2024-01-10")
    session = ledger.commit_session("2024-01-10", proposal, now=NOW)
    assert len(session.records) == 4


def test_absentee_notices_join_roster_phones(roster, ledger):
    session = ledger.commit_session("2024-01-10", [
        {"student_id": 1, "status": "present", "confidence": 90},
        {"student_id": 2, "status": "absent", "confidence": 0},
        {"student_id": 4, "status": "absent", "confidence": 0},
    ], now=NOW)

    notices = absentee_notices(session, roster)

    assert notices == [
        AbsenteeNotice(student_id=2, name="Bilal Khan", parent_phone="555-0002", date="2024-01-10"),
        AbsenteeNotice(student_id=4, name="Dana Cruz", parent_phone="5550004", date="2024-01-10"),
    ]


def test_absentee_notices_use_current_phone(roster, ledger):
    session = ledger.commit_session("2024-01-10", [{"student_id": 3, "status": "absent", "confidence": 0}], now=NOW)
    roster.update_student(3, parent_phone="+447700900123")

    assert absentee_notices(session, roster)[0].parent_phone == "+447700900123"


def test_logging_sms_notifier(caplog):
    notifier = LoggingSmsNotifier(clock=lambda: datetime(2024, 1, 10, 14, 5))
    notices = [
        AbsenteeNotice(student_id=2, name="Bilal Khan", parent_phone="555-0002", date="2024-01-10"),
        AbsenteeNotice(student_id=5, name="No Phone", parent_phone="", date="2024-01-10"),
    ]

    with caplog.at_level(logging.INFO, logger="smartattend.collaborators"):
        sent = notifier.notify_absentees(notices)

    assert sent == 1
    assert "SMS sent to 555-0002: Bilal Khan was absent today at 02:05 PM." in caplog.text


def test_logging_sms_notifier_nothing_to_send(caplog):
    with caplog.at_level(logging.INFO, logger="smartattend.collaborators"):
        assert LoggingSmsNotifier().notify_absentees([]) == 0
    assert "no SMS notifications needed" in caplog.text
