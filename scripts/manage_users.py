"""
User administration from the command line.

Run:
    python -m scripts.manage_users promote alice   # make alice an ADMIN
    python -m scripts.manage_users demote alice    # back to USER
    python -m scripts.manage_users delete alice    # remove alice and all her applications
"""
import argparse
import logging
import sys

from jobtracker.core.exceptions import NotFoundError
from jobtracker.db.models.user import Role
from jobtracker.db.session import SessionLocal
from jobtracker.services import user_service

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def promote(db, username: str) -> None:
    user_service.set_role(db, username, Role.ADMIN)
    logger.info(f"{username} is now an ADMIN")


def demote(db, username: str) -> None:
    user_service.set_role(db, username, Role.USER)
    logger.info(f"{username} is now a USER")


def delete(db, username: str) -> None:
    user = user_service.get_user_by_username(db, username)
    if not user:
        raise NotFoundError(f"User not found with username: {username}")
    removed = user_service.delete_user(db, user.id)
    logger.info(f"Deleted {username} and {removed} application(s)")


COMMANDS = {
    "promote": promote,
    "demote": demote,
    "delete": delete,
}


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Manage Job Tracker users")
    parser.add_argument("command", choices=sorted(COMMANDS))
    parser.add_argument("username")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        COMMANDS[args.command](db, args.username)
    except NotFoundError as e:
        logger.error(e.message)
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
