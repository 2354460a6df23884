"""Tests für Farbzuordnung und Terminal-Renderer."""

import pytest

from export.helpers import (
    STATUS_STYLES,
    TEACHER_COLORS,
    get_teacher_color,
    rich_teacher_style,
    status_markup,
)
from export.tui_renderer import render_assignment_rows, render_session_rows
from models.group import Group
from models.group_data import GroupData
from models.lecture import LectureStatus, TeacherLectureAssignment
from models.session import SessionTime
from models.teacher import Teacher


@pytest.fixture
def data() -> GroupData:
    group = Group(
        id="G1",
        total_lectures=3,
        current_lecture_number=1,
        upcoming_lecture_number=2,
        teachers=["A", "Q"],
        sessions=[
            SessionTime(id="s2", day="Thursday", start_time="17:40", end_time="18:40"),
            SessionTime(id="s1", day="Sunday", start_time="09:00", end_time="10:30"),
        ],
        teacher_assignments=[
            TeacherLectureAssignment(lecture_number=1, teacher_id="A", status=LectureStatus.CURRENT),
            TeacherLectureAssignment(lecture_number=2, teacher_id="Q", status=LectureStatus.DISMISSED,
                                     notes="Feiertag"),
        ],
    )
    return GroupData(groups=[group], teachers=[Teacher(id="A", name="Sara Ahmed")])


class TestTeacherColors:
    def test_deterministic_and_in_palette(self):
        for tid in ["A", "t-01", "teacher-42", ""]:
            assert get_teacher_color(tid) == get_teacher_color(tid)
            assert get_teacher_color(tid) in TEACHER_COLORS

    def test_code_sum_modulo(self):
        """"A" = 65 → 65 % 7 = 2 → purple."""
        assert get_teacher_color("A") == "purple"
        assert get_teacher_color("B") == "orange"

    def test_rich_style_mapping(self):
        assert rich_teacher_style("A") == "magenta"

    def test_every_status_styled(self):
        for status in LectureStatus:
            assert status in STATUS_STYLES
        assert status_markup(LectureStatus.DISMISSED) == "[red]dismissed[/red]"


class TestRenderer:
    def test_session_rows_sorted(self, data):
        rows = render_session_rows(data.groups[0])
        assert rows == [
            ["Sunday", "9:00 AM", "10:30 AM", "90 min"],
            ["Thursday", "5:40 PM", "6:40 PM", "60 min"],
        ]

    def test_assignment_rows(self, data):
        rows = render_assignment_rows(data.groups[0], data)
        assert len(rows) == 3
        assert rows[0][0] == "1"
        assert "Sara Ahmed" in rows[0][1]
        assert rows[0][2] == status_markup(LectureStatus.CURRENT)
        # Unbekannte Lehrer-ID → Platzhaltername
        assert "Unknown Teacher" in rows[1][1]
        assert rows[1][3] == "Feiertag"
        # Ohne Zuweisung: Strich und abgeleiteter Status
        assert rows[2][1] == "—"
        assert rows[2][2] == status_markup(LectureStatus.UPCOMING)
