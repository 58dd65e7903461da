"""Data-quality scanning for employee records."""

from staffledger.scanner.problems import Defect, ProblemScanner, find_defects, is_problem

__all__ = [
    "Defect",
    "ProblemScanner",
    "find_defects",
    "is_problem",
]
