"""HR Portal package.

This package is organized by feature modules (attendance, leaves, payroll, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
