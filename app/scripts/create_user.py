"""
Create a user directly in the store (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user EMAIL USERNAME PASSWORD [--admin]
Example:
  python -m app.scripts.create_user root@example.org admin your-secure-password --admin
"""
import argparse
import sys

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import build_engine, build_session_factory
from app.core.errors import DuplicateEntry
from app.core.security import PasswordHasher
from app.schemas.users import AdminUserUpdate, UserCreate
from app.services.users import create_user, update_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an account (use --admin for the first admin).")
    parser.add_argument("email", help="Email address, used to log in")
    parser.add_argument("username", help="Username (3-20 alphanumeric chars)")
    parser.add_argument("password", help="Password (at least 6 chars)")
    parser.add_argument("--admin", action="store_true", help="Grant the admin flag")
    args = parser.parse_args(argv)

    try:
        body = UserCreate(username=args.username, email=args.email, password=args.password)
    except ValidationError as e:
        for error in e.errors():
            print(error["msg"], file=sys.stderr)
        return 1

    settings = get_settings()
    hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    db = build_session_factory(build_engine(settings))()
    try:
        try:
            user = create_user(db, hasher, body)
        except DuplicateEntry:
            print(f"An account for '{body.email}' already exists.", file=sys.stderr)
            return 1
        if args.admin:
            update_user(db, hasher, user.id, AdminUserUpdate(is_admin=True))
        role = "admin" if args.admin else "user"
        print(f"Created {role} '{user.username}' <{user.email}> with id {user.id}.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
