"""Subject Attendance Tracker package.

This package is organized by feature modules (users, subjects, attendance, stats)
with a thin Flask controller layer and service/repository layers.
"""
