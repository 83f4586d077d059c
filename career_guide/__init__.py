"""
Career Guide API
Backend for a career guidance site for secondary-school students.

Architecture:
- PostgreSQL: streams, courses, exams, careers, colleges, feedback, preferences
- TTL cache: in-process, for repeated identical reads
"""

__version__ = "1.0.0"
