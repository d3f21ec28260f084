"""
Create a user directly in the database (e.g. the first admin). Run from project root:
  python -m starterpack.scripts.create_user EMAIL PASSWORD NAME [role]
Example:
  python -m starterpack.scripts.create_user admin@example.com your-secure-password "Site Admin" admin
"""
import argparse
import logging
import sys

from starterpack.core.config import get_settings
from starterpack.core.database import Database
from starterpack.core.errors import DuplicateEmailError
from starterpack.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from starterpack.models import USER_ROLES
from starterpack.services.users import create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a StarterPack user (bootstraps admins).")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("name", help="Display name")
    parser.add_argument("role", nargs="?", default="user", choices=list(USER_ROLES))
    args = parser.parse_args(argv)

    email = args.email.strip()
    if not email or "@" not in email or len(email) > 255:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1
    name = args.name.strip()
    if not name or len(name) > 255:
        print("Invalid name length.", file=sys.stderr)
        return 1

    database = Database(get_settings())
    db = database.session()
    try:
        user = create_user(
            db,
            name=name,
            email=email,
            password=args.password,
            role=args.role,
        )
        print(f"Created user '{user.email}' with role '{user.role}' (id {user.id}).")
        return 0
    except DuplicateEmailError:
        print(f"User '{email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
