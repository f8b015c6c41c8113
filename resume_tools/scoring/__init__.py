from .ats import calculate_ats_score
from .optimizer import optimize_resume

__all__ = ["calculate_ats_score", "optimize_resume"]
