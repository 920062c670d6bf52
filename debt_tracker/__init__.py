"""Personal loan tracking: debtors, installments, overdue flags and monthly reports."""

__version__ = "0.1.0"
