#!/usr/bin/env python3
"""
Create Admin Script

Admins can only be created by another admin through the API, so the first
one is created here.
Usage: python scripts/create_admin.py --name "Site Admin" --email admin@example.com
"""
import argparse
import getpass
import sys

from pydantic import ValidationError

from jobboard.core.errors import Conflict
from jobboard.core.logging import setup_logging
from jobboard.db.session import SessionLocal, init_db
from jobboard.schemas.schemas import AdminCreateRequest
from jobboard.services.account_service import create_admin


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create an admin account")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="Prompted for when omitted")
    args = parser.parse_args(argv)

    setup_logging()
    password = args.password or getpass.getpass("Password: ")

    try:
        request = AdminCreateRequest(name=args.name, email=args.email, password=password)
    except ValidationError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1

    init_db()
    db = SessionLocal()
    try:
        admin = create_admin(db, request)
    except Conflict as e:
        print(f"Could not create admin: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Admin created: id={admin.id} email={admin.email}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
