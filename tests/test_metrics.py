from __future__ import annotations

from codementor.metrics import (
    build_leaderboard,
    compute_admin_stats,
    compute_attendance_percentage,
    compute_display_metrics,
    course_attendance_breakdown,
    skill_distribution,
)
from codementor.models import (
    Assessment,
    AttendanceRecord,
    Course,
    PerformanceSnapshot,
    SkillProficiency,
    User,
)


def _record(present: bool, course_id: str = "c1", day: int = 1) -> AttendanceRecord:
    return AttendanceRecord(
        student_id="s1", course_id=course_id, date=f"2026-09-{day:02d}", present=present
    )


def _snapshot(student_id: str = "s1", progress: int = 87, **overrides) -> PerformanceSnapshot:
    values = dict(
        student_id=student_id,
        skills=["Python", "Rust"],
        coding_proficiency=85,
        assignment_completion=88,
        overall_progress=progress,
    )
    values.update(overrides)
    return PerformanceSnapshot(**values)


def test_attendance_three_of_four():
    records = [_record(True), _record(False), _record(True), _record(True)]
    assert compute_attendance_percentage(records) == 75


def test_attendance_empty_is_zero():
    assert compute_attendance_percentage([]) == 0


def test_attendance_rounds_half_up():
    records = [_record(True)] + [_record(False)] * 7
    assert compute_attendance_percentage(records) == 13


def test_display_metrics_recomputes_attendance():
    metrics = compute_display_metrics(_snapshot(), [_record(True), _record(False)])
    assert metrics.attendance == 50
    assert metrics.coding_proficiency == 85
    assert metrics.assignment_completion == 88
    assert metrics.overall_progress == 87


def test_skill_distribution_falls_back_to_coding_proficiency():
    snap = _snapshot(skill_levels={"Python": 92})
    assert skill_distribution(snap) == [
        SkillProficiency("Python", 92),
        SkillProficiency("Rust", 85),
    ]


def test_course_breakdown_counts_per_course():
    records = [
        _record(True, "c1", 1),
        _record(False, "c1", 8),
        _record(True, "c1", 15),
        _record(True, "c2", 2),
    ]
    courses = [Course("c1", "Python"), Course("c2", "JavaScript"), Course("c3", "Java"), Course("c4", "C++")]
    table = course_attendance_breakdown(records, courses)
    assert list(table["course_id"]) == ["c1", "c2", "c3"]
    c1 = table.iloc[0]
    assert (c1["total_classes"], c1["attended_classes"], c1["attendance_pct"]) == (3, 2, 67)
    assert c1["last_attendance"] == "2026-09-15"
    c3 = table.iloc[2]
    assert (c3["total_classes"], c3["attendance_pct"], c3["last_attendance"]) == (0, 0, "")


def test_course_breakdown_without_records():
    table = course_attendance_breakdown([], [Course("c1", "Python")])
    assert len(table) == 1
    assert table.iloc[0]["total_classes"] == 0


def test_leaderboard_ranks_by_progress():
    users = [
        User("s1", "a@x.edu", "pw", "student", "Ann"),
        User("s2", "b@x.edu", "pw", "student", "Ben"),
        User("s3", "c@x.edu", "pw", "student"),
    ]
    snaps = [_snapshot("s1", 80), _snapshot("s2", 91), _snapshot("s3", 80)]
    board = build_leaderboard(snaps, users, size=5)
    assert list(board["student_id"]) == ["s2", "s1", "s3"]
    assert list(board["rank"]) == [1, 2, 3]
    assert board.iloc[0]["name"] == "Ben"
    assert board.iloc[2]["name"] == "c@x.edu"


def test_leaderboard_skips_snapshots_without_a_student():
    users = [User("s1", "a@x.edu", "pw", "student", "Ann"), User("f1", "f@x.edu", "pw", "faculty", "Fay")]
    snaps = [_snapshot("s1", 80), _snapshot("s9", 99), _snapshot("f1", 95)]
    board = build_leaderboard(snaps, users)
    assert list(board["student_id"]) == ["s1"]
    assert list(board["rank"]) == [1]


def test_leaderboard_respects_size():
    users = [User(f"s{i}", f"s{i}@x.edu", "pw", "student") for i in range(10)]
    snaps = [_snapshot(f"s{i}", 50 + i) for i in range(10)]
    assert len(build_leaderboard(snaps, users, size=3)) == 3


def test_admin_stats_counts():
    users = [
        User("s1", "a@x.edu", "pw", "student"),
        User("s2", "b@x.edu", "pw", "student"),
        User("f1", "c@x.edu", "pw", "faculty"),
        User("a1", "d@x.edu", "pw", "admin"),
    ]
    stats = compute_admin_stats(users, [Course("c1", "Python")], [Assessment("q1", "c1", "Quiz")])
    assert (stats.total_students, stats.total_faculty) == (2, 1)
    assert (stats.total_courses, stats.total_assessments) == (1, 1)
