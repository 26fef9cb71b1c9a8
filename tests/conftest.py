from datetime import date, datetime

import pytest

from smartattend.ledger import AttendanceLedger
from smartattend.roster import RosterStore

TODAY = date(2024, 1, 10)
NOW = datetime(2024, 1, 10, 9, 30)


@pytest.fixture
def roster():
    store = RosterStore()
    store.add_student("Alice Brown", "R001", "10-A", "+15550001")
    store.add_student("Bilal Khan", "R002", "10-A", "555-0002")
    store.add_student("Chen Wei", "R003", "10-B", "(555) 0003")
    store.add_student("Dana Cruz", "R004", "10-B", "5550004")
    return store


@pytest.fixture
def ledger(roster):
    return AttendanceLedger(roster)


class RecordingNotifier:
    def __init__(self):
        self.calls = []

    def notify_absentees(self, notices):
        self.calls.append(list(notices))
        return len(notices)


class FixedCapture:
    def __init__(self, proposal):
        self.proposal = proposal
        self.days = []

    def propose_session(self, day):
        self.days.append(day)
        return list(self.proposal)


@pytest.fixture
def notifier():
    return RecordingNotifier()
