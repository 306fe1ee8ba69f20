"""Metric exports."""

from .completion import (
    compute_completion,
    compute_total_experience,
    completion_band,
    missing_required_fields,
)

__all__ = [
    "compute_completion",
    "compute_total_experience",
    "completion_band",
    "missing_required_fields",
]
