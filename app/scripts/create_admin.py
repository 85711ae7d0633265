"""
Create an account with a profile from the shell (e.g. the first admin). Run from project root:
  python -m app.scripts.create_admin EMAIL PASSWORD [--name NAME] [--role User|Admin]
Example:
  python -m app.scripts.create_admin admin@example.org your-secure-password --name "Site Admin"

Also seeds the SDG reference rows if they are missing.
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal, atomic
from app.core.errors import AppError
from app.core.security import hash_password
from app.models import Profile, User
from app.models.enums import UserRole
from app.services.accounts import validate_email, validate_password
from app.services.sdgs import seed_sdgs

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create a Sustainability Canvas account without the registration gate."
    )
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("--name", default="", help="Profile display name")
    parser.add_argument(
        "--role",
        default=UserRole.ADMIN.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        email = validate_email(args.email)
        validate_password(args.password)
        seed_sdgs(db)
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            logger.error("User %s already exists", email)
            return 1
        with atomic(db):
            user = User(
                email=email,
                password_hash=hash_password(args.password),
                role=args.role,
            )
            db.add(user)
            db.flush()
            db.add(Profile(user_id=user.id, name=args.name.strip()))
        logger.info("Created user %s with role %s", email, args.role)
        return 0
    except AppError as e:
        logger.error("%s", e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    sys.exit(main())
