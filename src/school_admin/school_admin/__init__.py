"""School administration package.

Organized by feature modules (teachers, students, schedules, sheets, sync) with a thin
Flask controller layer over service/repository layers.
"""
