from __future__ import annotations

import logging
from datetime import date

import pandas as pd
import streamlit as st

from codementor.catalog import RoleCatalog, default_catalog
from codementor.config import configure_logging, load_settings
from codementor.dashboard import (
    assessment_table,
    build_admin_overview,
    build_student_dashboard,
    student_job_matches,
)
from codementor.errors import InvalidArgument, RecordNotFound
from codementor.metrics import compute_attendance_percentage
from codementor.models import User
from codementor.stores import Stores, load_demo_stores

APP_TITLE = "CodeMentor AI"
APP_SUBTITLE = "Courses, assessments, attendance and career signals in one place"
NAV_ITEMS = {
    "student": ["Code Editor", "Courses", "Assessments", "Dashboard"],
    "faculty": ["Courses", "Assessments", "Attendance"],
    "admin": ["Dashboard"],
}
EDITOR_LANGUAGES = {
    "python": ("Python", "def main():\n    print(\"Hello, CodeMentor!\")\n\n\nmain()\n"),
    "javascript": ("JavaScript", "function main() {\n  console.log(\"Hello, CodeMentor!\");\n}\n\nmain();\n"),
    "java": (
        "Java",
        "public class Main {\n    public static void main(String[] args) {\n"
        "        System.out.println(\"Hello, CodeMentor!\");\n    }\n}\n",
    ),
    "cpp": (
        "C++",
        "#include <iostream>\n\nint main() {\n    std::cout << \"Hello, CodeMentor!\" << std::endl;\n"
        "    return 0;\n}\n",
    ),
}

logger = logging.getLogger("codementor.app")


def ensure_state(settings):
    if "stores" not in st.session_state:
        st.session_state["stores"] = load_demo_stores(settings.demo_data_path)
    if "user" not in st.session_state:
        st.session_state["user"] = None


def inject_styles():
    st.markdown(
        """
        <style>
        .hero-wrap {
            background: linear-gradient(120deg, #4f46e5 0%, #7c3aed 60%, #1e1b4b 100%);
            border-radius: 18px;
            padding: 24px;
            color: #f5f3ff;
            margin-bottom: 18px;
        }
        .hero-title { font-size: 2.0rem; font-weight: 700; margin-bottom: 0.3rem; }
        .hero-sub { opacity: 0.92; font-size: 1.0rem; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def as_pct_label(value: float) -> str:
    return f"{value}%"


def try_login(stores: Stores, email: str, password: str) -> User | None:
    return stores.users.authenticate(email, password)


def render_login(stores: Stores):
    st.markdown(
        f"""
        <div class="hero-wrap">
          <div class="hero-title">{APP_TITLE}</div>
          <div class="hero-sub">{APP_SUBTITLE}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )
    _, center, _ = st.columns([1, 1.25, 1])
    with center:
        st.markdown("#### Sign In")
        st.caption(
            "Demo accounts: `student@codementor.edu` / `student123`, "
            "`faculty@codementor.edu` / `faculty123`, `admin@codementor.edu` / `admin123`"
        )
        with st.form("login_form"):
            email = st.text_input("Email", value="student@codementor.edu")
            password = st.text_input("Password", type="password", value="student123")
            if st.form_submit_button("Sign In"):
                user = try_login(stores, email, password)
                if user is None:
                    st.error("Invalid credentials.")
                else:
                    logger.info("Signed in %s as %s", user.id, user.role)
                    st.session_state["user"] = user
                    st.rerun()


def render_student_dashboard(user: User, stores: Stores, catalog: RoleCatalog):
    try:
        dashboard = build_student_dashboard(user.id, stores)
    except RecordNotFound:
        st.warning("No performance data recorded yet.")
        return

    st.subheader(f"Welcome back, {dashboard.student.name or dashboard.student.email}")
    metrics = dashboard.metrics
    cards = [
        ("Coding Proficiency", metrics.coding_proficiency),
        ("Attendance", metrics.attendance),
        ("Assignments", metrics.assignment_completion),
        ("Overall Progress", metrics.overall_progress),
    ]
    for col, (title, value) in zip(st.columns(4), cards):
        col.metric(title, as_pct_label(value))
        col.progress(min(max(value, 0), 100) / 100.0)
    st.caption(f"Completed assignments: {dashboard.completed_assignments}")

    left, right = st.columns(2)
    with left:
        st.markdown("#### Skill Distribution")
        skill_df = pd.DataFrame(
            [{"Skill": item.skill, "Skill Level": item.proficiency} for item in dashboard.skill_levels]
        )
        if skill_df.empty:
            st.info("No skills recorded yet.")
        else:
            st.bar_chart(skill_df.set_index("Skill"))
    with right:
        st.markdown("#### Course Attendance")
        table = dashboard.course_attendance.rename(
            columns={
                "course_name": "Course",
                "attended_classes": "Attended",
                "total_classes": "Classes",
                "attendance_pct": "Attendance %",
                "last_attendance": "Last Attended",
            }
        ).drop(columns=["course_id"])
        st.dataframe(table, hide_index=True, use_container_width=True)

    st.markdown("#### Recommended Job Matches")
    try:
        matches = student_job_matches(dashboard, catalog)
    except InvalidArgument as exc:
        logger.warning("Could not match jobs for %s: %s", user.id, exc)
        st.warning("No recommendations available.")
        return
    if not matches:
        st.info("No recommendations available yet. Keep building your skills.")
    for match in matches:
        a, b = st.columns([4, 1])
        a.markdown(f"**{match.role}**  \n{match.company}")
        a.caption(match.recommendation)
        b.metric("Match", as_pct_label(match.match_score))


def render_courses(stores: Stores):
    st.subheader("Courses")
    courses = stores.courses.all()
    if not courses:
        st.info("No courses available.")
        return
    rows = []
    for course in courses:
        try:
            instructor = stores.users.get(course.instructor).name
        except RecordNotFound:
            instructor = course.instructor
        rows.append(
            {
                "Course": course.title,
                "Instructor": instructor,
                "Assessments": len(stores.assessments.for_course(course.id)),
            }
        )
    st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)


def render_assessments(user: User, stores: Stores):
    st.subheader("Assessments")
    table = assessment_table(stores)
    if table.empty:
        st.info("No assessments created yet.")
    for course_name, group in table.groupby("course", sort=False):
        st.markdown(f"#### {course_name}")
        for title in group["title"]:
            st.write(f"- {title}")

    if user.role != "faculty":
        return
    courses = stores.courses.all()
    if not courses:
        return
    course_labels = {c.id: c.title for c in courses}
    with st.form("assessment_form", clear_on_submit=True):
        st.markdown("#### New Assessment")
        course_id = st.selectbox("Course", list(course_labels), format_func=course_labels.get)
        title = st.text_input("Title")
        if st.form_submit_button("Create assessment"):
            try:
                stores.assessments.add(course_id, title)
            except InvalidArgument as exc:
                st.error(str(exc))
            else:
                st.rerun()


def render_code_editor():
    st.subheader("Code Editor")
    language = st.selectbox(
        "Language", list(EDITOR_LANGUAGES), format_func=lambda key: EDITOR_LANGUAGES[key][0]
    )
    label, starter = EDITOR_LANGUAGES[language]
    code = st.text_area(f"{label} source", value=starter, height=360, key=f"editor_{language}")
    st.caption(f"{len(code.splitlines())} lines")


def render_attendance_manager(stores: Stores):
    st.subheader("Attendance")
    students = stores.users.by_role("student")
    courses = stores.courses.all()
    if not students or not courses:
        st.info("Attendance needs at least one student and one course.")
        return
    labels = {s.id: s.name or s.email for s in students}
    course_labels = {c.id: c.title for c in courses}
    with st.form("attendance_form"):
        student_id = st.selectbox("Student", list(labels), format_func=labels.get)
        course_id = st.selectbox("Course", list(course_labels), format_func=course_labels.get)
        when = st.date_input("Date", value=date.today())
        present = st.checkbox("Present", value=True)
        if st.form_submit_button("Save attendance"):
            try:
                stores.attendance.mark(student_id, course_id, when.isoformat(), present)
                st.success("Attendance saved.")
            except InvalidArgument as exc:
                st.error(str(exc))

    summary = pd.DataFrame(
        [
            {
                "Student": labels[s.id],
                "Records": len(stores.attendance.records_for(s.id)),
                "Attendance %": compute_attendance_percentage(stores.attendance.records_for(s.id)),
            }
            for s in students
        ]
    )
    st.dataframe(summary, hide_index=True, use_container_width=True)


def render_user_table(title: str, role: str, users: list[User], stores: Stores):
    st.markdown(f"#### {title}")
    for user in users:
        a, b, c = st.columns([1, 4, 1])
        a.write(user.id)
        b.write(user.email)
        if c.button("Remove", key=f"remove_{role}_{user.id}"):
            try:
                stores.users.remove_user(user.id, role)
            except RecordNotFound as exc:
                st.error(str(exc))
            else:
                st.rerun()
    with st.form(f"add_{role}_form", clear_on_submit=True):
        email = st.text_input("Email", key=f"add_{role}_email")
        password = st.text_input("Password", type="password", key=f"add_{role}_password")
        name = st.text_input("Name", key=f"add_{role}_name")
        if st.form_submit_button(f"Add {role.title()}"):
            try:
                stores.users.add_user(email, password, role, name)
            except InvalidArgument as exc:
                st.error(str(exc))
            else:
                st.rerun()


def render_admin_dashboard(stores: Stores, leaderboard_size: int):
    overview = build_admin_overview(stores, leaderboard_size)
    st.subheader("Admin Dashboard")
    stats = overview.stats
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Students", stats.total_students, help="Enrolled students")
    c2.metric("Total Faculty", stats.total_faculty, help="Active faculty members")
    c3.metric("Total Courses", stats.total_courses, help="Available courses")
    c4.metric("Total Assessments", stats.total_assessments, help="Created assessments")

    st.markdown("#### Leaderboard")
    st.dataframe(overview.leaderboard, hide_index=True, use_container_width=True)

    left, right = st.columns(2)
    with left:
        render_user_table("Students", "student", overview.students, stores)
    with right:
        render_user_table("Faculty", "faculty", overview.faculty, stores)


settings = load_settings()
configure_logging(settings.log_level)
st.set_page_config(page_title=APP_TITLE, layout="wide")
inject_styles()
st.title(APP_TITLE)
st.caption(APP_SUBTITLE)

catalog = default_catalog(settings)
ensure_state(settings)
stores: Stores = st.session_state["stores"]
user: User | None = st.session_state["user"]

if user is None:
    with st.sidebar:
        st.markdown("### Session")
        st.info("Please sign in.")
    render_login(stores)
else:
    with st.sidebar:
        st.markdown("### Session")
        st.success(f"Signed in as {user.email}")
        st.caption(f"Role: {user.role}")
        if st.button("Sign Out"):
            st.session_state["user"] = None
            st.rerun()
        page = st.radio("Go to", NAV_ITEMS.get(user.role, []))

    if page == "Dashboard" and user.role == "student":
        render_student_dashboard(user, stores, catalog)
    elif page == "Dashboard" and user.role == "admin":
        render_admin_dashboard(stores, settings.leaderboard_size)
    elif page == "Courses":
        render_courses(stores)
    elif page == "Assessments":
        render_assessments(user, stores)
    elif page == "Code Editor" and user.role == "student":
        render_code_editor()
    elif page == "Attendance" and user.role == "faculty":
        render_attendance_manager(stores)
