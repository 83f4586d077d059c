#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the configured database is reachable.
Usage: python scripts/check_connection.py
"""
import sys
sys.path.insert(0, '.')

from career_guide.core.config import get_settings
from career_guide.db.database import check_connection


def main() -> int:
    settings = get_settings()
    print("=" * 50)
    print("CAREER GUIDE - CONNECTION CHECK")
    print("=" * 50)

    url = settings.sqlalchemy_url
    if settings.postgres_password and settings.postgres_password in url:
        url = url.replace(settings.postgres_password, "****")
    print(f"\n    URL: {url}")

    if check_connection():
        print("    ✅ Database: CONNECTED")
        return 0
    print("    ❌ Database: FAILED")
    return 1


if __name__ == "__main__":
    sys.exit(main())
