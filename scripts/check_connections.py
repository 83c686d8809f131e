#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the database and upload directory are usable.
Usage: python scripts/check_connections.py
"""
import os

from jobboard.core.config import get_settings
from jobboard.db.session import ping_database
from jobboard.utils.file_upload import UPLOAD_KINDS, ensure_upload_dirs


def _masked(url: str) -> str:
    if "@" not in url or "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:****@{host}"


def main():
    settings = get_settings()
    print("=" * 50)
    print("JOB BOARD - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Checking database...")
    print(f"    URL: {_masked(settings.sqlalchemy_url)}")
    database_ok = ping_database()
    print("    Database: CONNECTED" if database_ok else "    Database: FAILED")

    print("\n[2] Checking upload directory...")
    ensure_upload_dirs()
    uploads_ok = True
    for kind in UPLOAD_KINDS:
        path = os.path.join(settings.upload_dir, kind)
        writable = os.access(path, os.W_OK)
        uploads_ok = uploads_ok and writable
        print(f"    {path}: {'WRITABLE' if writable else 'NOT WRITABLE'}")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0 if database_ok and uploads_ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
