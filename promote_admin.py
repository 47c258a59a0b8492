import argparse
import sys

from sqlalchemy import text
from app.db.session import engine


def promote_admin(login: str, bind=engine, revoke: bool = False) -> bool:
    """
    Grant (or revoke) access rights for an existing login.

    Live sessions keep the rights they were opened with, so the client
    has to log in again for the change to apply.
    """
    with bind.connect() as connection:
        result = connection.execute(
            text("UPDATE clients SET access_rights = :rights WHERE login = :login"),
            {"rights": not revoke, "login": login},
        )
        connection.commit()
        return result.rowcount > 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Grant admin rights to a client login.")
    parser.add_argument("login")
    parser.add_argument("--revoke", action="store_true", help="remove admin rights instead")
    args = parser.parse_args()

    if not promote_admin(args.login, revoke=args.revoke):
        print(f"No client with login {args.login!r}.")
        sys.exit(1)
    print(f"{'Revoked' if args.revoke else 'Granted'} admin rights for {args.login!r}.")
