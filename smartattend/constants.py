APP_NAME = "SmartAttend"
PROGRAM_STORAGE = "data"
ROSTER_FILE = "roster.json"
LEDGER_FILE = "ledger.json"
SETTINGS_FILE = "settings.json"
RECORDS_FOLDER = "records"
STATUS_PRESENT = "present"
STATUS_ABSENT = "absent"
STATUSES = (STATUS_PRESENT, STATUS_ABSENT)
DEFAULT_METHOD = "ai_recognition"
DEFAULT_PHOTO = "default.jpg"
DEFAULT_SETTINGS = {
    "schoolName": "School Name",
    "principalName": "Principal Name",
    "schoolAddress": "School Address",
    "recognitionThreshold": 0.85,
    "antiSpoofingLevel": "medium",
    "smsEnabled": True,
    "dailyReports": True,
    "weeklyReports": False,
}
PHONE_PATTERN = r"^\+?[1-9]\d{0,15}$"
PHONE_SEPARATORS = r"[\s\-\(\)]"
TREND_DAYS = 7
IMPORT_COLUMNS = ["name", "roll no", "class", "parent phone"]
EXPORT_COLUMNS = ["ID", "Name", "Roll No", "Class", "Parent Phone"]
WINDOW_WIDTH = 900
WINDOW_HEIGHT = 600
TITLE_FONT = ("Arial", 18, "bold")
CLOCK_FONT = ("Arial", 14, "bold")
