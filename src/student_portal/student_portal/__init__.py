"""Student Portal package.

This package is organized by feature modules (students, attendance, results, ...)
with a record-store persistence layer, service/repository layers and a thin
Flask controller layer.
"""
