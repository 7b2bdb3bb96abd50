"""Golden document and run result models.

This package defines the immutable models produced by the document
parser (documents, cases, parameters) and by the runner (comparisons,
case results, verify results, change logs).
"""

from .documents import Case, Document, Parameter
from .results import CaseResult, Change, ChangeLog, Comparison, VerifyResult

__all__ = (
    'Case',
    'CaseResult',
    'Change',
    'ChangeLog',
    'Comparison',
    'Document',
    'Parameter',
    'VerifyResult',
)
