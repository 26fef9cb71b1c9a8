class AttendanceError(Exception):
    """Base class for every error raised by the attendance stores."""


class ValidationError(AttendanceError):
    pass


class DuplicateRollNumber(ValidationError):
    def __init__(self, roll_no):
        self.roll_no = roll_no
        super().__init__(f"Roll number {roll_no} already exists")


class NotFound(AttendanceError):
    def __init__(self, student_id):
        self.student_id = student_id
        super().__init__(f"Student {student_id} not found")


class UnknownStudent(AttendanceError):
    def __init__(self, student_id):
        self.student_id = student_id
        super().__init__(f"Session references unknown student {student_id}")


class PersistenceFailure(AttendanceError):
    def __init__(self, filepath, reason):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"Failed to access {filepath}: {reason}")
