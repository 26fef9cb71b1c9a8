import pytest

from smartattend.errors import DuplicateRollNumber, NotFound, ValidationError
from smartattend.roster import RosterStore, is_valid_phone


def test_add_student_assigns_sequential_ids():
    roster = RosterStore()
    first = roster.add_student("Alice", "R1", "9-A", "5551111")
    second = roster.add_student("Bob", "R2", "9-A", "5552222")

    assert first.id == 1
    assert second.id == 2
    assert [s.id for s in roster.all()] == [1, 2]


def test_add_student_is_findable_by_roll_no(roster):
    student = roster.add_student("  Eve Stone ", "R005", "10-C", "+449998887")

    found = roster.find_by_roll_no("R005")
    assert found == student
    assert found.id == 5
    assert found.name == "Eve Stone"
    assert found.student_class == "10-C"
    assert found.parent_phone == "+449998887"


def test_next_id_uses_max_not_count():
    roster = RosterStore.from_list([
        {"id": 7, "name": "A", "roll_no": "R7", "class": "1", "parent_phone": "5550007"},
    ])
    assert roster.add_student("B", "R8", "1", "5550008").id == 8


def test_duplicate_roll_no_leaves_roster_unchanged(roster):
    before = roster.all()

    with pytest.raises(DuplicateRollNumber) as exc:
        roster.add_student("Someone Else", "R002", "11-A", "5559999")

    assert exc.value.roll_no == "R002"
    assert roster.all() == before


@pytest.mark.parametrize("fields", [
    ("", "R9", "1", "5551234"),
    ("Name", "  ", "1", "5551234"),
    ("Name", "R9", "", "5551234"),
    ("Name", "R9", "1", ""),
])
def test_add_student_requires_all_fields(roster, fields):
    with pytest.raises(ValidationError):
        roster.add_student(*fields)
    assert len(roster) == 4


@pytest.mark.parametrize("phone,valid", [
    ("+15551234567", True),
    ("555 123 4567", True),
    ("(555) 123-4567", True),
    ("0123456", False),
    ("12345678901234567", False),
    ("phone", False),
    ("+", False),
])
def test_phone_validation(phone, valid):
    assert is_valid_phone(phone) is valid


def test_invalid_phone_rejected(roster):
    with pytest.raises(ValidationError):
        roster.add_student("Name", "R9", "1", "not-a-number")
    assert roster.find_by_roll_no("R9") is None


def test_update_student_merges_fields(roster):
    updated = roster.update_student(2, student_class="11-A")

    assert updated.id == 2
    assert updated.name == "Bilal Khan"
    assert updated.student_class == "11-A"
    assert roster.find_by_id(2).student_class == "11-A"


def test_update_student_can_keep_own_roll_no(roster):
    updated = roster.update_student(1, roll_no="R001", name="Alice B.")
    assert updated.roll_no == "R001"
    assert updated.name == "Alice B."


def test_update_student_rejects_roll_no_of_other_student(roster):
    with pytest.raises(DuplicateRollNumber):
        roster.update_student(1, roll_no="R003")
    assert roster.find_by_id(1).roll_no == "R001"


def test_update_unknown_student(roster):
    with pytest.raises(NotFound):
        roster.update_student(99, name="Ghost")


def test_update_cannot_change_id(roster):
    with pytest.raises(ValidationError):
        roster.update_student(1, id=42)
    assert roster.find_by_id(1) is not None


def test_update_validation_failure_does_not_mutate(roster):
    with pytest.raises(ValidationError):
        roster.update_student(3, parent_phone="abc")
    assert roster.find_by_id(3).parent_phone == "(555) 0003"


def test_lookups_return_none_when_absent(roster):
    assert roster.find_by_id(100) is None
    assert roster.find_by_roll_no("nope") is None


def test_round_trip_through_persisted_shape(roster):
    data = roster.to_list()
    assert data[0]["class"] == "10-A"
    assert data[0]["photo"] == "default.jpg"

    restored = RosterStore.from_list(data)
    assert restored.all() == roster.all()
