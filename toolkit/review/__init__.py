"""Weekly review generation."""
from .weekly_generator import ReviewData, WeeklyReviewGenerator, get_week_start

__all__ = ["ReviewData", "WeeklyReviewGenerator", "get_week_start"]
