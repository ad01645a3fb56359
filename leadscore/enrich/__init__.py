"""Normalization of incoming company records."""

from .normalize import RecordNormalizer, calculate_data_completeness

__all__ = ["RecordNormalizer", "calculate_data_completeness"]
