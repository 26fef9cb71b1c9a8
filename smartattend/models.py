from dataclasses import dataclass, field
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from smartattend.constants import (
    DEFAULT_METHOD,
    DEFAULT_PHOTO,
    DEFAULT_SETTINGS,
    STATUS_PRESENT,
    STATUS_ABSENT,
)


@dataclass
class Student:
    id: int
    name: str
    roll_no: str
    student_class: str
    parent_phone: str
    photo: str = DEFAULT_PHOTO

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "roll_no": self.roll_no,
            "class": self.student_class,
            "parent_phone": self.parent_phone,
            "photo": self.photo,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=int(data["id"]),
            name=data["name"],
            roll_no=data["roll_no"],
            student_class=data["class"],
            parent_phone=data["parent_phone"],
            photo=data.get("photo", DEFAULT_PHOTO),
        )


@dataclass
class AttendanceEntry:
    student_id: int
    student_name: str
    status: str
    timestamp: str
    confidence: float = 0

    @property
    def is_present(self):
        return self.status == STATUS_PRESENT

    def to_dict(self):
        return {
            "student_id": self.student_id,
            "student_name": self.student_name,
            "status": self.status,
            "timestamp": self.timestamp,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            student_id=int(data["student_id"]),
            student_name=data.get("student_name", ""),
            status=data["status"],
            timestamp=data.get("timestamp", ""),
            confidence=data.get("confidence", 0),
        )


@dataclass
class AttendanceSession:
    date: str
    records: List[AttendanceEntry]
    timestamp: str
    method: str = DEFAULT_METHOD

    @property
    def present_records(self):
        return [r for r in self.records if r.status == STATUS_PRESENT]

    @property
    def absent_records(self):
        return [r for r in self.records if r.status == STATUS_ABSENT]

    def to_dict(self):
        return {
            "date": self.date,
            "records": [r.to_dict() for r in self.records],
            "timestamp": self.timestamp,
            "method": self.method,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            date=data["date"],
            records=[AttendanceEntry.from_dict(r) for r in data.get("records", [])],
            timestamp=data.get("timestamp", ""),
            method=data.get("method", DEFAULT_METHOD),
        )


@dataclass
class TrendPoint:
    date: str
    present: int
    absent: int


@dataclass
class Statistics:
    total_students: int = 0
    present_today: int = 0
    absent_today: int = 0
    attendance_rate: float = 0
    total_days: int = 0
    sms_sent_today: int = 0
    average_confidence: float = 0
    trend: List[TrendPoint] = field(default_factory=list)


class Settings(BaseModel):
    """School settings, stored under the camelCase keys of settings.json."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", validate_assignment=True)

    school_name: str = Field(DEFAULT_SETTINGS["schoolName"], alias="schoolName")
    principal_name: str = Field(DEFAULT_SETTINGS["principalName"], alias="principalName")
    school_address: str = Field(DEFAULT_SETTINGS["schoolAddress"], alias="schoolAddress")
    recognition_threshold: float = Field(DEFAULT_SETTINGS["recognitionThreshold"], ge=0, le=1, alias="recognitionThreshold")
    anti_spoofing_level: Literal["low", "medium", "high"] = Field(DEFAULT_SETTINGS["antiSpoofingLevel"], alias="antiSpoofingLevel")
    sms_enabled: StrictBool = Field(DEFAULT_SETTINGS["smsEnabled"], alias="smsEnabled")
    daily_reports: StrictBool = Field(DEFAULT_SETTINGS["dailyReports"], alias="dailyReports")
    weekly_reports: StrictBool = Field(DEFAULT_SETTINGS["weeklyReports"], alias="weeklyReports")

    def to_dict(self):
        return self.model_dump(by_alias=True)

    @classmethod
    def from_dict(cls, data):
        return cls.model_validate(data or {})


@dataclass
class AbsenteeNotice:
    student_id: int
    name: str
    parent_phone: str
    date: str


@dataclass
class ImportResult:
    imported: List[Student] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def success_count(self):
        return len(self.imported)
