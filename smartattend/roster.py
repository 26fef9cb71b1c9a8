import logging
import re
from dataclasses import replace

from smartattend.constants import PHONE_PATTERN, PHONE_SEPARATORS
from smartattend.errors import ValidationError, DuplicateRollNumber, NotFound
from smartattend.models import Student

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "roll_no", "student_class", "parent_phone", "photo")


def _clean(value):
    return str(value).strip() if value is not None else ""


def is_valid_phone(phone):
    return re.match(PHONE_PATTERN, re.sub(PHONE_SEPARATORS, "", phone)) is not None


def validate_student_fields(name, roll_no, student_class, parent_phone):
    """Return the trimmed fields or raise ValidationError."""
    name = _clean(name)
    roll_no = _clean(roll_no)
    student_class = _clean(student_class)
    parent_phone = _clean(parent_phone)

    if not name or not roll_no or not student_class or not parent_phone:
        raise ValidationError("Missing required fields")

    if not is_valid_phone(parent_phone):
        raise ValidationError(f"Invalid phone number: {parent_phone}")

    return name, roll_no, student_class, parent_phone


class RosterStore:
    def __init__(self, students=None):
        self._students = list(students or [])

    def __len__(self):
        return len(self._students)

    def __iter__(self):
        return iter(self._students)

    def all(self):
        return list(self._students)

    def next_id(self):
        if not self._students:
            return 1
        return max(s.id for s in self._students) + 1

    def find_by_id(self, student_id):
        for s in self._students:
            if s.id == student_id:
                return s
        return None

    def find_by_roll_no(self, roll_no):
        for s in self._students:
            if s.roll_no == roll_no:
                return s
        return None

    def add_student(self, name, roll_no, student_class, parent_phone):
        name, roll_no, student_class, parent_phone = validate_student_fields(
            name, roll_no, student_class, parent_phone
        )
        if self.find_by_roll_no(roll_no) is not None:
            raise DuplicateRollNumber(roll_no)

        student = Student(
            id=self.next_id(),
            name=name,
            roll_no=roll_no,
            student_class=student_class,
            parent_phone=parent_phone,
        )
        self._students.append(student)
        logger.info("Added student %s (%s) with id %s", name, roll_no, student.id)
        return student

    def update_student(self, student_id, **fields):
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        index = None
        for i, s in enumerate(self._students):
            if s.id == student_id:
                index = i
                break
        if index is None:
            raise NotFound(student_id)

        merged = replace(self._students[index], **fields)
        name, roll_no, student_class, parent_phone = validate_student_fields(
            merged.name, merged.roll_no, merged.student_class, merged.parent_phone
        )

        existing = self.find_by_roll_no(roll_no)
        if existing is not None and existing.id != student_id:
            raise DuplicateRollNumber(roll_no)

        updated = replace(
            merged,
            name=name,
            roll_no=roll_no,
            student_class=student_class,
            parent_phone=parent_phone,
        )
        self._students[index] = updated
        logger.info("Updated student %s", student_id)
        return updated

    def to_list(self):
        return [s.to_dict() for s in self._students]

    def load(self, data):
        self._students = [Student.from_dict(item) for item in data or []]

    @classmethod
    def from_list(cls, data):
        roster = cls()
        roster.load(data)
        return roster
