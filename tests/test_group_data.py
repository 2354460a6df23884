"""Tests für Gruppen-Datensatz, JSON-Persistenz und Demo-Daten."""

from pathlib import Path

import pytest

from data.fake_data import FakeDataGenerator
from models.group import Group
from models.group_data import GroupData
from models.session import SessionTime
from models.teacher import Teacher
from scheduling.group_rules import validate_group
from scheduling.session_formatter import display_label


@pytest.fixture
def data() -> GroupData:
    return GroupData(
        teachers=[Teacher(id=" A ", name="Sara Ahmed"), Teacher(id="B", name="Omar Saleh")],
        groups=[
            Group(id="G1", teachers=["A", "B"], total_lectures=4,
                  sessions=[SessionTime(id="s1", day="Sunday", start_time="09:00", end_time="10:00")]),
            Group(id="G2"),
        ],
    )


class TestGroupData:
    def test_teacher_id_stripped(self, data):
        assert data.teachers[0].id == "A"

    def test_get_group(self, data):
        assert data.get_group("G2").id == "G2"
        with pytest.raises(KeyError):
            data.get_group("G9")

    def test_teacher_name_fallback(self, data):
        assert data.teacher_name("B") == "Omar Saleh"
        assert data.teacher_name("X") == "Unknown Teacher"
        assert data.teacher_name("X", default="?") == "?"

    def test_replace_group(self, data):
        updated = data.replace_group(data.get_group("G2").model_copy(update={"total_lectures": 9}))
        assert updated.get_group("G2").total_lectures == 9
        assert data.get_group("G2").total_lectures == 1
        with pytest.raises(KeyError):
            data.replace_group(Group(id="G9"))

    def test_group_context(self, data):
        ctx = data.get_group("G1").context
        assert ctx.current_lecture_number == 0
        assert ctx.upcoming_lecture_number == 1

    def test_session_by_id(self, data):
        group = data.get_group("G1")
        assert group.session_by_id("s1").day == "Sunday"
        assert group.session_by_id("nope") is None

    def test_summary(self, data):
        text = data.summary()
        assert "Gruppen: 2 (1 ohne Lehrkraft)" in text
        assert "Termine/Woche: 1" in text


class TestJsonPersistence:
    def test_roundtrip(self, data, tmp_path: Path):
        path = tmp_path / "out" / "group_data.json"
        data.save_json(path)
        loaded = GroupData.load_json(path)
        assert loaded.groups == data.groups
        assert loaded.teachers == data.teachers
        assert loaded.created_at is not None
        assert loaded.modified_at is not None

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            GroupData.load_json(tmp_path / "missing.json")


class TestFakeData:
    def test_reproducible(self):
        assert FakeDataGenerator(seed=7).generate() == FakeDataGenerator(seed=7).generate()

    def test_groups_are_consistent(self):
        """Alle Demo-Gruppen bestehen den Gruppen-Check."""
        data = FakeDataGenerator(seed=1).generate()
        for group in data.groups:
            assert validate_group(group).is_valid, group.id

    def test_special_cases_present(self):
        data = FakeDataGenerator(seed=3, num_groups=4).generate()
        assert data.groups[-1].teachers == []
        assert data.groups[-1].teacher_assignments == []
        assert data.groups[-2].sessions == []
        assert data.groups[-2].name == "New Group"

    def test_names_match_sessions(self):
        data = FakeDataGenerator(seed=5).generate()
        for group in data.groups:
            assert group.name == display_label(group)
