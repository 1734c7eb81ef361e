"""
Kiosk and public registration forms.

Both forms check required fields locally and only then POST once to
/public/register. There is no idempotency key: a retry after a network
failure simply posts again.
"""
import logging
from dataclasses import asdict, dataclass
from typing import Callable, Optional

from academy.services.api_client import ApiError

logger = logging.getLogger(__name__)


@dataclass
class KioskForm:
    student_name: str = ""
    father_name: str = ""
    parent_cell: str = ""
    student_cell: str = ""
    gender: str = "Male"
    session_id: str = ""
    address: str = ""
    referral_source: str = ""
    class_id: str = ""
    group: str = ""

    def validation_error(self) -> Optional[str]:
        if not self.student_name.strip() or not self.father_name.strip() or not self.parent_cell.strip():
            return "Please fill in all required fields"
        if not self.class_id:
            return "Please select a class"
        if not self.session_id:
            return "Please select a session"
        if not self.group:
            return "Please select a group"
        return None

    def payload(self) -> dict:
        body = {
            "studentName": self.student_name.strip(),
            "fatherName": self.father_name.strip(),
            "parentCell": self.parent_cell.strip(),
            "studentCell": self.student_cell.strip(),
            "gender": self.gender,
            "address": self.address.strip(),
            "referralSource": self.referral_source or "",
            "class": self.class_id,
            "group": self.group,
        }
        if self.session_id:
            body["session"] = self.session_id
        return body


@dataclass
class PublicForm:
    student_name: str = ""
    father_name: str = ""
    parent_cell: str = ""
    student_cell: str = ""
    email: str = ""
    address: str = ""
    class_id: str = ""

    def validation_error(self) -> Optional[str]:
        if not self.student_name or not self.father_name or not self.parent_cell or not self.class_id:
            return "Please fill all required fields"
        return None

    def payload(self) -> dict:
        return {
            "studentName": self.student_name,
            "fatherName": self.father_name,
            "parentCell": self.parent_cell,
            "studentCell": self.student_cell,
            "email": self.email,
            "address": self.address,
            "class": self.class_id,
        }


@dataclass
class SubmitResult:
    ok: bool
    error: Optional[str] = None
    submitted_name: str = ""
    application_id: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


def submit(form, post: Callable[[dict], dict]) -> SubmitResult:
    """
    Validate, then POST once. `post` receives the payload and returns the
    response's data; it raises ApiError on failure.
    """
    error = form.validation_error()
    if error:
        return SubmitResult(False, error=error)

    try:
        data = post(form.payload()) or {}
    except ApiError as e:
        logger.warning("Registration rejected: %s", e.message)
        return SubmitResult(False, error=e.message or "Registration failed")

    return SubmitResult(
        True,
        submitted_name=data.get("studentName") or form.student_name.strip(),
        application_id=str(data.get("applicationId") or ""),
    )
