"""Tests für Termin-Modell und Termin-Validierung."""

from datetime import datetime, time, timezone

import pytest

from config.schema import EngineConfig
from models.session import SessionDraft, SessionTime, Weekday, parse_clock
from scheduling.session_validator import (
    SessionValidationError,
    find_overlaps,
    sessions_overlap,
    validate_session,
    validate_session_list,
)


def _s(day: str, start: str, end: str, sid: str = "") -> SessionTime:
    if sid:
        return SessionTime(id=sid, day=day, start_time=start, end_time=end)
    return SessionTime(day=day, start_time=start, end_time=end)


# ─── MODELL ───────────────────────────────────────────────────────────────────

class TestSessionModel:
    def test_parse_clock_formats(self):
        """24h-, Sekunden- und 12h-Format werden gelesen."""
        assert parse_clock("09:00") == time(9, 0)
        assert parse_clock("9:05") == time(9, 5)
        assert parse_clock("17:40:00") == time(17, 40)
        assert parse_clock("5:40 PM") == time(17, 40)
        assert parse_clock("12:10 am") == time(0, 10)

    def test_parse_clock_invalid(self):
        """Unlesbare Uhrzeit → ValueError."""
        with pytest.raises(ValueError):
            parse_clock("neun Uhr")

    def test_datetime_reduced_to_time(self):
        """Datum und Zeitzone eines datetime werden verworfen."""
        d = SessionDraft(
            day="Sunday",
            start_time=datetime(2024, 3, 3, 9, 0, tzinfo=timezone.utc),
            end_time=datetime(1999, 1, 1, 10, 30),
        )
        assert d.start_time == time(9, 0)
        assert d.start_time.tzinfo is None
        assert d.end_time == time(10, 30)

    def test_day_normalized(self):
        """Tagesnamen werden vereinheitlicht, Enum-Werte akzeptiert."""
        assert SessionDraft(day=" sunday ", start_time="09:00", end_time="10:00").day == "Sunday"
        assert SessionDraft(day=Weekday.THURSDAY, start_time="09:00", end_time="10:00").day == "Thursday"

    def test_duration_and_rank(self):
        s = _s("Monday", "09:00", "10:30")
        assert s.duration_minutes == 90
        assert s.day_rank == 1
        assert _s("Friday", "09:00", "10:00").day_rank == 999

    def test_session_gets_id(self):
        """Gespeicherte Termine bekommen eine eindeutige Kennung."""
        a, b = _s("Sunday", "09:00", "10:00"), _s("Sunday", "09:00", "10:00")
        assert a.id and b.id and a.id != b.id
        assert a.to_draft() == SessionDraft(day="Sunday", start_time="09:00", end_time="10:00")


# ─── ÜBERSCHNEIDUNG ───────────────────────────────────────────────────────────

class TestOverlap:
    @pytest.mark.parametrize("a,b,expected", [
        (("09:00", "10:00"), ("09:30", "10:30"), True),
        (("09:00", "10:00"), ("10:00", "11:00"), False),
        (("09:00", "12:00"), ("10:00", "11:00"), True),
        (("09:00", "10:00"), ("08:00", "09:00"), False),
        (("09:00", "10:00"), ("09:00", "10:00"), True),
    ])
    def test_symmetric(self, a, b, expected):
        """overlaps(A, B) == overlaps(B, A)."""
        sa, sb = _s("Sunday", *a), _s("Sunday", *b)
        assert sessions_overlap(sa, sb) is expected
        assert sessions_overlap(sb, sa) is expected

    def test_different_days_never_overlap(self):
        assert not sessions_overlap(_s("Sunday", "09:00", "10:00"), _s("Monday", "09:00", "10:00"))

    def test_find_overlaps_pairs(self):
        a = _s("Sunday", "09:00", "10:00", "a")
        b = _s("Sunday", "09:30", "10:30", "b")
        c = _s("Sunday", "10:30", "11:00", "c")
        pairs = find_overlaps([a, b, c])
        assert [(x.id, y.id) for x, y in pairs] == [("a", "b")]


# ─── EINZELTERMIN ─────────────────────────────────────────────────────────────

class TestValidateSession:
    def test_valid_session(self):
        result = validate_session(SessionDraft(day="Sunday", start_time="09:00", end_time="10:00"))
        assert result.is_valid
        assert result.violations == []

    def test_overlap_rejected_with_one_conflict(self):
        """Sonntag 09:30–10:30 gegen bestehenden Sonntag 09:00–10:00."""
        existing = [_s("Sunday", "09:00", "10:00", "s1")]
        candidate = SessionDraft(day="Sunday", start_time="09:30", end_time="10:30")
        result = validate_session(candidate, existing)
        assert result.codes == ["overlap_conflict"]
        assert result.violations[0].conflicting_session_id == "s1"
        assert "s1" in result.messages[0]

    def test_touching_sessions_accepted(self):
        """Ende 10:00 und Beginn 10:00 am selben Tag sind kein Konflikt."""
        existing = [_s("Sunday", "09:00", "10:00")]
        assert validate_session(_s("Sunday", "10:00", "11:00"), existing).is_valid

    def test_self_exclusion(self):
        """Unveränderter Termin gegen die eigene Liste mit exclude_id ist gültig."""
        own = _s("Tuesday", "14:00", "15:00", "own")
        existing = [_s("Tuesday", "09:00", "10:00", "x"), own]
        assert validate_session(own, existing, exclude_id="own").is_valid
        assert not validate_session(own, existing).is_valid

    def test_one_conflict_per_existing_session(self):
        existing = [
            _s("Sunday", "09:00", "10:00", "a"),
            _s("Sunday", "10:00", "11:00", "b"),
        ]
        result = validate_session(SessionDraft(day="Sunday", start_time="09:30", end_time="10:30"), existing)
        assert result.codes == ["overlap_conflict", "overlap_conflict"]
        assert {v.conflicting_session_id for v in result.violations} == {"a", "b"}

    @pytest.mark.parametrize("day", ["Friday", "Saturday"])
    def test_weekend_rejected(self, day):
        """Freitag und Samstag sind keine Unterrichtstage."""
        result = validate_session(SessionDraft(day=day, start_time="09:00", end_time="10:00"))
        assert result.codes == ["invalid_day"]
        assert day in result.messages[0]

    def test_all_violations_accumulated(self):
        """Ungültiger Tag und vertauschte Zeiten werden gemeinsam gemeldet."""
        result = validate_session(SessionDraft(day="Friday", start_time="11:00", end_time="10:00"))
        assert result.codes == ["invalid_day", "invalid_time_range"]

    def test_equal_start_end_rejected(self):
        result = validate_session(SessionDraft(day="Monday", start_time="10:00", end_time="10:00"))
        assert result.codes == ["invalid_time_range"]

    def test_min_duration_from_config(self):
        """Mindestdauer greift nur, wenn konfiguriert."""
        short = SessionDraft(day="Monday", start_time="10:00", end_time="10:30")
        assert validate_session(short).is_valid
        result = validate_session(short, config=EngineConfig(min_session_minutes=60))
        assert result.codes == ["too_short"]

    def test_raise_for_violations(self):
        result = validate_session(SessionDraft(day="Friday", start_time="11:00", end_time="10:00"))
        with pytest.raises(SessionValidationError) as exc:
            result.raise_for_violations()
        assert len(exc.value.violations) == 2

    def test_raise_for_violations_noop_when_valid(self):
        validate_session(SessionDraft(day="Monday", start_time="09:00", end_time="10:00")).raise_for_violations()


# ─── LISTEN-PRÜFUNG ───────────────────────────────────────────────────────────

class TestValidateSessionList:
    def test_clean_list(self):
        sessions = [_s("Sunday", "09:00", "10:00"), _s("Thursday", "17:40", "18:40")]
        assert validate_session_list(sessions).is_valid

    def test_overlap_reported_once_per_pair(self):
        sessions = [_s("Sunday", "09:00", "10:00", "a"), _s("Sunday", "09:30", "10:30", "b")]
        result = validate_session_list(sessions)
        assert result.codes == ["overlap_conflict"]
        assert result.violations[0].session_id == "a"
        assert result.violations[0].conflicting_session_id == "b"

    def test_invalid_entries_carry_session_id(self):
        sessions = [_s("Friday", "09:00", "10:00", "fri")]
        result = validate_session_list(sessions)
        assert result.codes == ["invalid_day"]
        assert result.violations[0].session_id == "fri"

    def test_too_many_sessions(self):
        config = EngineConfig(max_sessions_per_group=2)
        sessions = [
            _s("Sunday", "09:00", "10:00"),
            _s("Monday", "09:00", "10:00"),
            _s("Tuesday", "09:00", "10:00"),
        ]
        assert validate_session_list(sessions, config).codes == ["too_many_sessions"]
