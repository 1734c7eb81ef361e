# academy/config.py
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

API_PORT = 5000
DEFAULT_API_BASE_URL = f"http://localhost:{API_PORT}/api"
API_BASE_URL_ENV = "ACADEMY_API_BASE_URL"
API_TIMEOUT = float(os.getenv("ACADEMY_API_TIMEOUT", "15"))

LOG_LEVEL = os.getenv("ACADEMY_LOG_LEVEL", "INFO")

APP_DATA_DIR = Path(os.getenv("ACADEMY_DATA_DIR", Path.home() / ".academy_admin"))
LOCAL_STORE_FILE = "local_storage.json"

# Fixed key for the student object kept in on-device storage
STUDENT_INFO_KEY = "studentInfo"

SESSION_STATUSES = ["active", "upcoming", "completed"]
SESSION_FILTERS = ["all"] + SESSION_STATUSES

GENDERS = ["Male", "Female"]
GROUPS = ["Pre-Medical", "Pre-Engineering", "Computer Science", "Arts"]
REFERRAL_SOURCES = ["", "Friend", "Social Media", "Banner", "Newspaper", "Other"]

# Female students sit on the Left wing, male students on the Right
WING_BY_GENDER = {"Female": "Left", "Male": "Right"}
MAX_SEAT_CHANGES = 2

CURRENCY = "PKR"

SESSIONS_HEADERS = [
    "session_id",
    "name",
    "start",
    "end",
    "status",
    "duration_days",
    "progress",
    "days_left",
]

CLASSES_HEADERS = [
    "class_id",
    "title",
    "group",
    "status",
    "session",
    "teacher",
    "seats",
]

STUDENTS_HEADERS = [
    "student_id",
    "name",
    "father_name",
    "class",
    "group",
    "gender",
    "seat",
    "total_fee",
    "paid",
    "balance",
]

PAYROLL_HEADERS = [
    "name",
    "subject",
    "compensation",
    "total_earned",
    "total_withdrawn",
    "net_payable",
]
