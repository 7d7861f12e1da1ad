"""
Mint an admin bearer token for the /api/admin routes.

    b2bee-create-admin [--email admin@b2bee.ai] [--days 7]
"""
import argparse
import sys
from datetime import timedelta
from typing import List, Optional

from b2bee.config import settings
from b2bee.core.security import create_admin_token


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an admin access token")
    parser.add_argument("--email", default=settings.ADMIN_EMAIL, help="Admin email (token subject)")
    parser.add_argument("--days", type=int, default=None, help="Token lifetime in days")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.days is not None and args.days <= 0:
        print("--days must be positive", file=sys.stderr)
        return 2

    expires = timedelta(days=args.days) if args.days else None
    print(create_admin_token(args.email, expires_delta=expires))
    return 0


if __name__ == "__main__":
    sys.exit(main())
