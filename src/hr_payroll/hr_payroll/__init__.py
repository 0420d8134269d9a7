"""HR Payroll package.

This package is organized by feature modules (calendar, attendance, payroll, ...)
with a thin Flask controller layer and service/repository layers around the
attendance-driven salary engine.
"""
