from .habit import Habit
from .habit_record import HabitRecord
from .monthly_target import MonthlyTarget
from .diary import DiaryEntry
from .investment import InvestmentGoal, InvestmentDiaryEntry
from .profile import UserProfile

__all__ = [
    "Habit",
    "HabitRecord",
    "MonthlyTarget",
    "DiaryEntry",
    "InvestmentGoal",
    "InvestmentDiaryEntry",
    "UserProfile",
]
