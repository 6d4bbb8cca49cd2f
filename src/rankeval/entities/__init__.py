"""Evaluation result entities."""

from .document_key import DocumentKey
from .evaluation_result import EvaluationResult

__all__ = ["DocumentKey", "EvaluationResult"]
