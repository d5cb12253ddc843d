"""mlmonitor domain models - re-exports all public model classes.

    - inference.py - Inference (model prediction record)
    - feedback.py  - Feedback (correction linked to an inference)
"""

from __future__ import annotations

from mlmonitor.models.feedback import Feedback
from mlmonitor.models.inference import Inference

__all__ = [
    "Feedback",
    "Inference",
]
