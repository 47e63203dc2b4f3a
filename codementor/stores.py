"""In-memory stand-ins for the platform's users, courses, attendance and performance data.

Every store is seeded from plain dicts (see ``data/demo_data.json``) and lives
for one app session. Nothing is persisted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from codementor.errors import InvalidArgument, RecordNotFound
from codementor.models import (
    USER_ROLES,
    Assessment,
    AttendanceRecord,
    Course,
    PerformanceSnapshot,
    User,
)

logger = logging.getLogger(__name__)

ID_PREFIXES = {"student": "s", "faculty": "f", "admin": "a"}


class UserDirectory:
    def __init__(self, users: list[User] | None = None):
        self._users: list[User] = list(users or [])

    def all(self) -> list[User]:
        return list(self._users)

    def by_role(self, role: str) -> list[User]:
        return [user for user in self._users if user.role == role]

    def get(self, user_id: str) -> User:
        for user in self._users:
            if user.id == user_id:
                return user
        raise RecordNotFound(f"no user with id {user_id!r}")

    def authenticate(self, email: str, password: str) -> User | None:
        email = email.strip().lower()
        for user in self._users:
            if user.email.lower() == email and user.password == password:
                return user
        return None

    def _next_id(self, role: str) -> str:
        prefix = ID_PREFIXES[role]
        taken = {user.id for user in self._users}
        n = len(self.by_role(role)) + 1
        while f"{prefix}{n}" in taken:
            n += 1
        return f"{prefix}{n}"

    def add_user(self, email: str, password: str, role: str, name: str = "") -> User:
        email = (email or "").strip()
        if not email or not password:
            raise InvalidArgument("Please fill in all fields")
        if role not in USER_ROLES:
            raise InvalidArgument(f"unknown role {role!r}")
        if any(user.email.lower() == email.lower() for user in self._users):
            raise InvalidArgument(f"User with email {email} already exists")
        user = User(id=self._next_id(role), email=email, password=password, role=role, name=name)
        self._users.append(user)
        logger.info("Added %s %s (%s)", role, user.id, email)
        return user

    def remove_user(self, user_id: str, role: str) -> None:
        for idx, user in enumerate(self._users):
            if user.id == user_id and user.role == role:
                del self._users[idx]
                logger.info("Removed %s %s", role, user_id)
                return
        raise RecordNotFound(f"no {role} with id {user_id!r}")


class CourseStore:
    def __init__(self, courses: list[Course] | None = None):
        self._courses = list(courses or [])

    def all(self) -> list[Course]:
        return list(self._courses)

    def get(self, course_id: str) -> Course:
        for course in self._courses:
            if course.id == course_id:
                return course
        raise RecordNotFound(f"no course with id {course_id!r}")


class AssessmentStore:
    def __init__(self, assessments: list[Assessment] | None = None):
        self._assessments = list(assessments or [])

    def all(self) -> list[Assessment]:
        return list(self._assessments)

    def for_course(self, course_id: str) -> list[Assessment]:
        return [item for item in self._assessments if item.course_id == course_id]

    def add(self, course_id: str, title: str) -> Assessment:
        title = (title or "").strip()
        if not course_id or not title:
            raise InvalidArgument("course and title are required for an assessment")
        taken = {item.id for item in self._assessments}
        n = len(self._assessments) + 1
        while f"q{n}" in taken:
            n += 1
        assessment = Assessment(id=f"q{n}", course_id=course_id, title=title)
        self._assessments.append(assessment)
        logger.info("Added assessment %s to %s", assessment.id, course_id)
        return assessment


class AttendanceStore:
    def __init__(self, records: list[AttendanceRecord] | None = None):
        self._records = list(records or [])

    def all(self) -> list[AttendanceRecord]:
        return list(self._records)

    def records_for(self, student_id: str) -> list[AttendanceRecord]:
        return [record for record in self._records if record.student_id == student_id]

    def mark(self, student_id: str, course_id: str, date: str, present: bool) -> AttendanceRecord:
        if not student_id or not course_id or not date:
            raise InvalidArgument("student, course and date are required to mark attendance")
        record = AttendanceRecord(
            student_id=student_id, course_id=course_id, date=date, present=bool(present)
        )
        for idx, existing in enumerate(self._records):
            if (existing.student_id, existing.course_id, existing.date) == (student_id, course_id, date):
                self._records[idx] = record
                break
        else:
            self._records.append(record)
        logger.info(
            "Marked %s %s in %s on %s", student_id, "present" if present else "absent", course_id, date
        )
        return record


class PerformanceStore:
    def __init__(self, snapshots: list[PerformanceSnapshot] | None = None):
        self._snapshots = {snap.student_id: snap for snap in snapshots or []}

    def all(self) -> list[PerformanceSnapshot]:
        return list(self._snapshots.values())

    def get(self, student_id: str) -> PerformanceSnapshot:
        try:
            return self._snapshots[student_id]
        except KeyError:
            raise RecordNotFound(f"no performance data for student {student_id!r}") from None


@dataclass
class Stores:
    users: UserDirectory
    courses: CourseStore
    assessments: AssessmentStore
    attendance: AttendanceStore
    performance: PerformanceStore


def build_stores(raw: dict[str, Any]) -> Stores:
    return Stores(
        users=UserDirectory([User(**item) for item in raw.get("users", [])]),
        courses=CourseStore([Course(**item) for item in raw.get("courses", [])]),
        assessments=AssessmentStore([Assessment(**item) for item in raw.get("assessments", [])]),
        attendance=AttendanceStore([AttendanceRecord(**item) for item in raw.get("attendance", [])]),
        performance=PerformanceStore(
            [PerformanceSnapshot(**item) for item in raw.get("performance", [])]
        ),
    )


def load_demo_stores(path: Path) -> Stores:
    with Path(path).open("r", encoding="utf-8") as f:
        raw = json.load(f)
    stores = build_stores(raw)
    logger.debug(
        "Loaded demo data from %s: %d users, %d courses, %d attendance records",
        path,
        len(stores.users.all()),
        len(stores.courses.all()),
        len(stores.attendance.all()),
    )
    return stores
