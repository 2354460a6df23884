from models.session import ALLOWED_DAYS, DAY_ORDER, SessionDraft, SessionTime, Weekday
from models.lecture import LectureContext, LectureStatus, TeacherLectureAssignment
from models.teacher import Teacher
from models.group import Group
from models.group_data import GroupData

__all__ = [
    "ALLOWED_DAYS",
    "DAY_ORDER",
    "SessionDraft",
    "SessionTime",
    "Weekday",
    "LectureContext",
    "LectureStatus",
    "TeacherLectureAssignment",
    "Teacher",
    "Group",
    "GroupData",
]
