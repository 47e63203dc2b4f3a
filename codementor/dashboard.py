from __future__ import annotations

import pandas as pd

from codementor.catalog import RoleCatalog
from codementor.metrics import (
    build_leaderboard,
    compute_admin_stats,
    compute_display_metrics,
    course_attendance_breakdown,
    skill_distribution,
)
from codementor.models import AdminOverview, JobMatch, StudentDashboard
from codementor.recommendations import match_skill_profile
from codementor.stores import Stores

ASSESSMENT_COLUMNS = ["course_id", "course", "assessment_id", "title"]


def build_student_dashboard(student_id: str, stores: Stores) -> StudentDashboard:
    student = stores.users.get(student_id)
    performance = stores.performance.get(student_id)
    attendance = stores.attendance.records_for(student_id)
    return StudentDashboard(
        student=student,
        metrics=compute_display_metrics(performance, attendance),
        skill_levels=skill_distribution(performance),
        completed_assignments=performance.completed_assignments,
        course_attendance=course_attendance_breakdown(attendance, stores.courses.all()),
    )


def student_job_matches(
    dashboard: StudentDashboard, catalog: RoleCatalog | None = None
) -> list[JobMatch]:
    """Job matches for the dashboard's skill levels; may raise ``InvalidArgument``."""
    return match_skill_profile(dashboard.skill_levels, catalog)


def assessment_table(stores: Stores) -> pd.DataFrame:
    """Assessments grouped by course, in course order then store order."""
    rows = [
        {
            "course_id": course.id,
            "course": course.title,
            "assessment_id": item.id,
            "title": item.title,
        }
        for course in stores.courses.all()
        for item in stores.assessments.for_course(course.id)
    ]
    return pd.DataFrame(rows, columns=ASSESSMENT_COLUMNS)


def build_admin_overview(stores: Stores, leaderboard_size: int = 5) -> AdminOverview:
    users = stores.users.all()
    return AdminOverview(
        stats=compute_admin_stats(users, stores.courses.all(), stores.assessments.all()),
        leaderboard=build_leaderboard(stores.performance.all(), users, leaderboard_size),
        students=stores.users.by_role("student"),
        faculty=stores.users.by_role("faculty"),
    )
