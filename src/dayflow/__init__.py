"""DayFlow attendance engine.

This package is organized by feature modules (attendance, employees, leaves, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
