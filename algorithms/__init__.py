from .math_tools import MathTools
from .progression import ProgressionCalculator
from .stall_detector import StallDetector
from .substitution_resolver import SubstitutionResolver
from .insight import InsightGenerator
from .weekly_review import WeeklyReviewSynthesizer

__all__ = [
    "MathTools",
    "ProgressionCalculator",
    "StallDetector",
    "SubstitutionResolver",
    "InsightGenerator",
    "WeeklyReviewSynthesizer",
]
