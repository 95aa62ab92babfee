"""Workforce System package.

This package is organized by feature modules (auth, employees, roles, payroll)
with a thin Flask controller layer and service/repository layers underneath.
"""
