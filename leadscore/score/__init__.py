"""Weighted lead scoring and ranking."""

from .scorer import WeightedScorer, score_one, score_and_rank
from .basic import basic_lead_score
from .presets import ScoringPreset, DEFAULT_PRESETS, get_preset

__all__ = [
    "WeightedScorer",
    "score_one",
    "score_and_rank",
    "basic_lead_score",
    "ScoringPreset",
    "DEFAULT_PRESETS",
    "get_preset",
]
