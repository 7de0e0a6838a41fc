"""Academic fee ledger & attendance aggregation package.

This package is organized by feature modules (academic_calendar, fees,
payments, attendance, reports, ...) with a thin Flask controller layer and
service/repository layers underneath.
"""
