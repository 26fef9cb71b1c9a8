import logging
from datetime import datetime

from pydantic import ValidationError as PydanticValidationError

from smartattend.collaborators import SimulatedRecognizer, LoggingSmsNotifier, absentee_notices
from smartattend.constants import DEFAULT_METHOD, PROGRAM_STORAGE
from smartattend.errors import PersistenceFailure, ValidationError
from smartattend import importer
from smartattend.ledger import AttendanceLedger, as_iso_date
from smartattend.models import Settings
from smartattend.roster import RosterStore
from smartattend.stats import compute_statistics, student_attendance_rate
from smartattend import storage

logger = logging.getLogger(__name__)


class AttendanceSystem:
    """Owns the roster, ledger and settings of one school.

    Every mutating call recomputes statistics and writes through to the
    data folder. A failed write is kept in ``warnings`` and never reverts
    the in-memory change.
    """

    def __init__(self, data_folder=PROGRAM_STORAGE, capture=None, notifier=None, clock=None):
        self.data_folder = data_folder
        self.clock = clock or datetime.now
        self.roster = RosterStore()
        self.ledger = AttendanceLedger(self.roster)
        self.settings = Settings()
        self.warnings = []
        self.capture = capture or SimulatedRecognizer(self.roster)
        self.notifier = notifier or LoggingSmsNotifier(clock=self.clock)
        self.stats = None
        self.refresh_statistics()

    def today(self):
        return self.clock().date()

    # ---------------------------------------------
    # persistence
    # ---------------------------------------------

    def _warn(self, error):
        logger.warning("Persistence failure: %s", error)
        self.warnings.append(str(error))

    def load(self):
        try:
            storage.create_folders(self.data_folder)
        except OSError as e:
            self._warn(PersistenceFailure(self.data_folder, str(e)))
            return False

        steps = [
            (storage.roster_path, storage.load_roster, self.roster.load),
            (storage.ledger_path, storage.load_ledger, self.ledger.load),
            (storage.settings_path, storage.load_settings, self._load_settings),
        ]
        ok = True
        for path_for, read, apply in steps:
            try:
                apply(read(self.data_folder))
            except PersistenceFailure as e:
                self._warn(e)
                ok = False
            except (KeyError, TypeError, ValueError) as e:
                self._warn(PersistenceFailure(path_for(self.data_folder), f"malformed data ({e})"))
                ok = False

        self.refresh_statistics()
        return ok

    def _load_settings(self, data):
        self.settings = Settings.from_dict(data)

    def persist(self):
        try:
            storage.save_roster(self.data_folder, self.roster.to_list())
            storage.save_ledger(self.data_folder, self.ledger.to_list())
            storage.save_settings(self.data_folder, self.settings.to_dict())
        except PersistenceFailure as e:
            self._warn(e)
            return False
        return True

    def refresh_statistics(self, today=None):
        self.stats = compute_statistics(self.roster, self.ledger, today or self.today())
        return self.stats

    def _after_mutation(self):
        self.refresh_statistics()
        self.persist()

    # ---------------------------------------------
    # roster
    # ---------------------------------------------

    def add_student(self, name, roll_no, student_class, parent_phone):
        student = self.roster.add_student(name, roll_no, student_class, parent_phone)
        self._after_mutation()
        return student

    def update_student(self, student_id, **fields):
        student = self.roster.update_student(student_id, **fields)
        self._after_mutation()
        return student

    def import_students(self, rows):
        result = importer.import_students(self.roster, rows)
        if result.imported:
            self._after_mutation()
        return result

    def import_students_file(self, filepath):
        return self.import_students(importer.read_student_table(filepath))

    def student_rate(self, student_id):
        return student_attendance_rate(self.ledger, student_id)

    # ---------------------------------------------
    # attendance
    # ---------------------------------------------

    def commit_session(self, day, proposed_entries, method=DEFAULT_METHOD):
        session = self.ledger.commit_session(day, proposed_entries, method, now=self.clock())
        self._after_mutation()
        return session

    def notify_absentees(self, session):
        notices = absentee_notices(session, self.roster)
        if not self.settings.sms_enabled:
            return 0
        return self.notifier.notify_absentees(notices)

    def take_attendance(self, day=None):
        day = as_iso_date(day or self.today())
        if not len(self.roster):
            raise ValidationError("No students found. Please add students first.")

        proposal = self.capture.propose_session(day)
        session = self.commit_session(day, proposal)
        sent = self.notify_absentees(session)
        return session, sent

    # ---------------------------------------------
    # settings
    # ---------------------------------------------

    def update_settings(self, **fields):
        try:
            candidate = Settings.model_validate({**self.settings.model_dump(), **fields})
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid settings: {e}") from e

        self.settings = candidate
        self.persist()
        return self.settings
