"""Mint a bearer token for local development.

Usage:
    python -m scripts.issue_token <actor_id> [minutes]
Signs with SECRET_KEY; production tokens come from the identity provider.
"""

import sys
from datetime import timedelta

from clubops.infrastructure.security.jwt import create_access_token


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.issue_token <actor_id> [minutes]", file=sys.stderr)
        sys.exit(1)
    minutes = int(sys.argv[2]) if len(sys.argv) > 2 else None
    token = create_access_token(
        {"sub": sys.argv[1]},
        expires_delta=timedelta(minutes=minutes) if minutes else None,
    )
    print(token)


if __name__ == "__main__":
    main()
