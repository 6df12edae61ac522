"""Class Register package.

This package is organized by feature modules (classes, students, attendance,
analytics, ...) with a thin Flask controller layer on top of the
service/repository layers.
"""
