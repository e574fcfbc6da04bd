"""Kernel context – the evaluation context handed in by callers."""
from devcycle_openfeature.kernel.context.evaluation_context import EvaluationContext

__all__ = ["EvaluationContext"]
