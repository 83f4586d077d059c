#!/usr/bin/env python3
"""
Schema Setup Script

Creates any missing tables (streams, courses, exams, careers, colleges,
feedback, user_preferences) on the configured database. Existing tables
are left untouched.

Usage: python scripts/init_db.py
"""
import sys
sys.path.insert(0, '.')

from career_guide.db.database import get_engine
from career_guide.db.tables import create_tables, metadata


def main() -> None:
    print("\n[1] Creating tables...")
    create_tables(get_engine())
    for name in metadata.tables:
        print(f"    ✅ {name}")
    print("\nSchema ready.")


if __name__ == "__main__":
    main()
