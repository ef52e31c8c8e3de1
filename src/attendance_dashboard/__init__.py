"""Attendance Dashboard package.

This package is organized by feature modules (attendance, leave, employees,
dashboard, ...) with a thin Flask controller layer over plain services that
talk to the remote spreadsheet API.
"""
