"""Planungs-Engine: Termin-Validierung, Anzeigenamen, Vorlesungs-Status, Lehrer-Rotation."""

from .session_validator import (
    SessionValidationError,
    SessionValidationResult,
    SessionViolation,
    find_overlaps,
    sessions_overlap,
    validate_session,
    validate_session_list,
)
from .session_formatter import display_label, format_session, summarize_sessions
from .lecture_state import derive_lecture_state, resolve_lecture_states
from .rotation import (
    AssignmentManager,
    LectureOverride,
    TeacherStats,
    generate_assignments,
    set_assignment,
)
from .group_rules import GroupReport, validate_group

__all__ = [
    "SessionValidationError",
    "SessionValidationResult",
    "SessionViolation",
    "find_overlaps",
    "sessions_overlap",
    "validate_session",
    "validate_session_list",
    "display_label",
    "format_session",
    "summarize_sessions",
    "derive_lecture_state",
    "resolve_lecture_states",
    "AssignmentManager",
    "LectureOverride",
    "TeacherStats",
    "generate_assignments",
    "set_assignment",
    "GroupReport",
    "validate_group",
]
