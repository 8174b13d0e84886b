# gradebook/client/students_table.py
import re
from urllib.parse import quote
from typing import Callable, Dict, List, Optional

import httpx

from gradebook.core.config import CONFIG
from gradebook.core.logger import get_logger
from gradebook.models.student_schemas import SUBJECTS

logger = get_logger("client")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

UPDATE_FAILED = "Failed to update student."


def parse_int(text: str) -> Optional[int]:
    """Leading-integer parse of a score input box; None when there is none."""
    m = _LEADING_INT.match(text or "")
    return int(m.group(1)) if m else None


def _log_alert(message: str) -> None:
    logger.info("ALERT: %s", message)


class StudentsTable:
    """
    The editable students table, headless. Viewing is the default state;
    `click_update` enters Editing for one row, and only a successful
    `submit` leaves it. The rows always come from the last successful fetch.
    """

    def __init__(self, http: httpx.Client, alert: Callable[[str], None] = _log_alert):
        self.http = http
        self.alert = alert
        self.students: List[dict] = []
        self.edit_row: Optional[str] = None
        self.updated_scores: Dict[str, Optional[int]] = {}

    @classmethod
    def connect(cls, base_url: str | None = None, **kwargs) -> "StudentsTable":
        return cls(httpx.Client(base_url=base_url or CONFIG.API_BASE_URL), **kwargs)

    @property
    def editing(self) -> bool:
        return self.edit_row is not None

    def mount(self) -> None:
        self.fetch_students()

    def fetch_students(self) -> None:
        try:
            resp = self.http.get("/allStudents")
            resp.raise_for_status()
            self.students = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching students: %s", e)

    def click_update(self, roll_no: str) -> None:
        for student in self.students:
            if student["rollNo"] == roll_no:
                self.edit_row = roll_no
                self.updated_scores = dict(student["scores"])
                return
        raise LookupError(f"No row with rollNo {roll_no!r}")

    def change_score(self, subject: str, text: str) -> None:
        if not self.editing:
            raise RuntimeError("No row is being edited")
        if subject not in SUBJECTS:
            raise ValueError(f"Unknown subject {subject!r}")
        self.updated_scores[subject] = parse_int(text)

    def submit(self) -> bool:
        if not self.editing:
            raise RuntimeError("No row is being edited")
        roll_no = self.edit_row
        try:
            resp = self.http.put(
                f"/student/{quote(roll_no, safe='')}",
                json={"scores": self.updated_scores},
            )
            resp.raise_for_status()
            message = resp.json()["message"]
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.error("Error updating student %s: %s", roll_no, e)
            self.alert(UPDATE_FAILED)
            return False

        self.alert(message)
        self.edit_row = None
        self.fetch_students()
        return True

    def render(self) -> List[List[str]]:
        """Rows as displayed: name, rollNo, five subjects, action label."""
        rows = []
        for student in self.students:
            editing = student["rollNo"] == self.edit_row
            source = self.updated_scores if editing else student["scores"]
            cells = [student["name"], student["rollNo"]]
            for subject in SUBJECTS:
                value = source.get(subject)
                cells.append("" if value is None else str(value))
            cells.append("Submit" if editing else "Update")
            rows.append(cells)
        return rows
