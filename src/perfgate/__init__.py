"""Assert web-performance audit reports against configured thresholds."""

from perfgate.assertions.base import AssertionResult
from perfgate.runner import evaluate

__all__ = ["AssertionResult", "evaluate"]
