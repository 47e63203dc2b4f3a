from __future__ import annotations

from dataclasses import asdict
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from codementor.models import (
    AdminStats,
    Assessment,
    AttendanceRecord,
    Course,
    MetricsSummary,
    PerformanceSnapshot,
    SkillProficiency,
    User,
)
from codementor.rounding import round_half_up

COURSE_ATTENDANCE_COLUMNS = [
    "course_id",
    "course_name",
    "total_classes",
    "attended_classes",
    "attendance_pct",
    "last_attendance",
]
LEADERBOARD_COLUMNS = ["rank", "student_id", "name", "overall_progress", "coding_proficiency"]


def compute_attendance_percentage(records: Iterable[AttendanceRecord]) -> int:
    present = np.fromiter((bool(record.present) for record in records), dtype=bool)
    if present.size == 0:
        return 0
    return round_half_up(float(present.mean()) * 100.0)


def compute_display_metrics(
    snapshot: PerformanceSnapshot, attendance_records: Iterable[AttendanceRecord]
) -> MetricsSummary:
    # attendance always comes from the records the caller holds, never the snapshot
    return MetricsSummary(
        coding_proficiency=snapshot.coding_proficiency,
        attendance=compute_attendance_percentage(attendance_records),
        assignment_completion=snapshot.assignment_completion,
        overall_progress=snapshot.overall_progress,
    )


def skill_distribution(snapshot: PerformanceSnapshot) -> list[SkillProficiency]:
    """Per-skill levels in snapshot order; unrated skills fall back to coding proficiency."""
    return [
        SkillProficiency(
            skill=skill,
            proficiency=int(snapshot.skill_levels.get(skill, snapshot.coding_proficiency)),
        )
        for skill in snapshot.skills
    ]


def course_attendance_breakdown(
    records: Iterable[AttendanceRecord], courses: Sequence[Course], limit: int = 3
) -> pd.DataFrame:
    frame = pd.DataFrame(
        [asdict(record) for record in records],
        columns=["student_id", "course_id", "date", "present"],
    )
    frame["present"] = frame["present"].astype(bool)
    totals = frame.groupby("course_id")["present"].agg(["size", "sum"])
    last_seen = frame[frame["present"]].groupby("course_id")["date"].max()

    rows = []
    for course in list(courses)[:limit]:
        total = int(totals.at[course.id, "size"]) if course.id in totals.index else 0
        attended = int(totals.at[course.id, "sum"]) if course.id in totals.index else 0
        rows.append(
            {
                "course_id": course.id,
                "course_name": course.title,
                "total_classes": total,
                "attended_classes": attended,
                "attendance_pct": round_half_up(attended / total * 100.0) if total else 0,
                "last_attendance": last_seen.get(course.id, ""),
            }
        )
    return pd.DataFrame(rows, columns=COURSE_ATTENDANCE_COLUMNS)


def build_leaderboard(
    snapshots: Iterable[PerformanceSnapshot], users: Iterable[User], size: int = 5
) -> pd.DataFrame:
    names = {user.id: user.name or user.email for user in users if user.role == "student"}
    frame = pd.DataFrame(
        [
            {
                "student_id": snap.student_id,
                "name": names[snap.student_id],
                "overall_progress": snap.overall_progress,
                "coding_proficiency": snap.coding_proficiency,
            }
            for snap in snapshots
            if snap.student_id in names
        ],
        columns=LEADERBOARD_COLUMNS[1:],
    )
    ranked = (
        frame.sort_values("overall_progress", ascending=False, kind="mergesort")
        .head(size)
        .reset_index(drop=True)
    )
    ranked.insert(0, "rank", list(range(1, len(ranked) + 1)))
    return ranked


def compute_admin_stats(
    users: Iterable[User], courses: Sequence[Course], assessments: Sequence[Assessment]
) -> AdminStats:
    roles = [user.role for user in users]
    return AdminStats(
        total_students=roles.count("student"),
        total_faculty=roles.count("faculty"),
        total_courses=len(courses),
        total_assessments=len(assessments),
    )
