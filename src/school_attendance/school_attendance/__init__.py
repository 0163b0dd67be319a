"""School Attendance package.

Feature modules (classes, attendance, reports, users, ...) sit behind a thin
Flask controller layer; services depend on repository protocols only.
"""
