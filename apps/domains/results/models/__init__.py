# apps/domains/results/models/__init__.py

from .test_result import TestResult

__all__ = [
    "TestResult",
]
