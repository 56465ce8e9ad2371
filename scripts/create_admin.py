#!/usr/bin/env python3
"""Create an admin account, or reset an existing one to admin.

Uses the same STORAGE_BACKEND / DATABASE_URL settings as the API, so run it
against the database the server uses:
    python scripts/create_admin.py alice --password 's3cret!' --email alice@example.com
"""

import argparse
import getpass
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from doorsign.core.exceptions import AppException  # noqa: E402
from doorsign.core.security import hash_password  # noqa: E402
from doorsign.core.settings import StorageBackend, get_settings  # noqa: E402
from doorsign.store import build_store  # noqa: E402
from doorsign.user.models import UserRole  # noqa: E402
from doorsign.user.schemas import UserCreate  # noqa: E402
from doorsign.user.service import UserService  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("username")
    parser.add_argument("--password", help="prompted for when omitted")
    parser.add_argument("--email")
    parser.add_argument("--epaper-id", dest="epaper_id")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    if settings.storage_backend == StorageBackend.memory:
        print("  ✗ STORAGE_BACKEND=memory; nothing would be persisted")
        return 1

    password = args.password or getpass.getpass("Password: ")
    store = build_store(settings)
    store.create_schema()

    try:
        existing = store.get_user_by_username(args.username)
        if existing is not None:
            store.update_user(
                existing.id,
                {"role": UserRole.admin, "password_hash": hash_password(password)},
            )
            print(f"  ✓ {args.username} updated (admin, password reset)")
            return 0

        UserService(store).create_user(
            UserCreate(
                username=args.username,
                password=password,
                role=UserRole.admin,
                email=args.email,
                epaper_id=args.epaper_id,
            )
        )
    except AppException as e:
        print(f"  ✗ {e.message}")
        return 1

    print(f"  ✓ {args.username} created (admin)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
