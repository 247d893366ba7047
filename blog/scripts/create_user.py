"""
Create a user from the shell (e.g. the first admin). Run from project root:
  python -m blog.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m blog.scripts.create_user admin admin@blog.io 'S3cure-password' admin
"""
import argparse
import sys

from blog.core.database import SessionLocal
from blog.core.security import USERNAME_MAX_LEN, hash_password, password_policy_errors
from blog.models import DEFAULT_ROLES, Role, User
from blog.schemas.common import EMAIL_PATTERN
from blog.services.seed import seed_roles


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a blog user without going through the API.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8+ chars, one uppercase letter, one digit)")
    parser.add_argument("role", nargs="?", default="user", choices=list(DEFAULT_ROLES))
    args = parser.parse_args()

    username = args.username.strip()
    email = args.email.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not EMAIL_PATTERN.match(email):
        print("Invalid email format.", file=sys.stderr)
        return 1
    problems = password_policy_errors(args.password)
    if problems:
        for problem in problems:
            print(problem, file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        seed_roles(db)
        existing = (
            db.query(User)
            .filter((User.email == email) | (User.username == username))
            .first()
        )
        if existing:
            print(f"User with email '{email}' or username '{username}' already exists.", file=sys.stderr)
            return 1
        role = db.query(Role).filter(Role.name == args.role).one()
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(args.password),
            role_id=role.id,
        )
        db.add(user)
        db.commit()
        print(f"Created user '{username}' <{email}> with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
