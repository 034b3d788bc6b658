"""
Utility functions module.

Money handling, currency display, calendar-date and identifier helpers
shared across the system.

Money Semantics:
- All amounts are Decimal values fixed to two places, rounded half-up
- Display uses a fixed currency symbol prefix with Indian digit grouping
- Plan dates are stored as ISO calendar-date strings (YYYY-MM-DD)
"""
