from .config import ScheduleConfig

__all__ = ["ScheduleConfig"]
