"""
Finance Tracker - Source Package

A personal finance tracker that keeps every transaction, credit card,
loan and investment in one local document and derives the monthly
figures the user looks at.

DESIGN PRINCIPLES:
1. Derived figures are pure functions of the document
2. Every mutation is a whole-document transform
3. Validate before touching state
4. Every change is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
