from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

USER_ROLES = ("student", "faculty", "admin")


@dataclass(frozen=True)
class RoleCatalogEntry:
    role: str
    company: str
    min_score: int


@dataclass(frozen=True)
class SkillProficiency:
    skill: str
    proficiency: int


@dataclass
class JobMatch:
    role: str
    company: str
    match_score: int
    recommendation: str


@dataclass
class AttendanceRecord:
    student_id: str
    course_id: str
    date: str
    present: bool


@dataclass
class PerformanceSnapshot:
    student_id: str
    skills: list[str]
    coding_proficiency: int
    assignment_completion: int
    overall_progress: int
    completed_assignments: int = 0
    skill_levels: dict[str, int] = field(default_factory=dict)


@dataclass
class MetricsSummary:
    coding_proficiency: int
    attendance: int
    assignment_completion: int
    overall_progress: int


@dataclass
class User:
    id: str
    email: str
    password: str
    role: str
    name: str = ""


@dataclass
class Course:
    id: str
    title: str
    instructor: str = ""


@dataclass
class Assessment:
    id: str
    course_id: str
    title: str


@dataclass
class AdminStats:
    total_students: int
    total_faculty: int
    total_courses: int
    total_assessments: int


@dataclass
class StudentDashboard:
    student: User
    metrics: MetricsSummary
    skill_levels: list[SkillProficiency]
    completed_assignments: int
    course_attendance: pd.DataFrame


@dataclass
class AdminOverview:
    stats: AdminStats
    leaderboard: pd.DataFrame
    students: list[User]
    faculty: list[User]
