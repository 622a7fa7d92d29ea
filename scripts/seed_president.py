"""Bootstrap the role directory with its first president (Postgres only).

Usage:
    python -m scripts.seed_president <actor_id>
Refuses to run when a president is already active; after bootstrap, presidents
are changed through POST /api/v1/roles.
"""

import asyncio
import sys

from clubops.core.config import get_settings
from clubops.domain.enums import RoleCode
from clubops.domain.exceptions import RoleAlreadyAssignedException
from clubops.infrastructure.persistence import database
from clubops.infrastructure.persistence.repositories import RoleAssignmentRepository


async def main() -> None:
    """Create the first active president assignment."""
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.seed_president <actor_id>", file=sys.stderr)
        sys.exit(1)
    actor_id = sys.argv[1]

    get_settings()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL not configured", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            repo = RoleAssignmentRepository(session)
            presidents = [
                a for a in await repo.list_active() if a.role is RoleCode.PRESIDENT
            ]
            if presidents:
                print(
                    f"President already assigned: {presidents[0].actor_id}",
                    file=sys.stderr,
                )
                sys.exit(1)
            try:
                assignment = await repo.create_assignment(
                    actor_id=actor_id, role=RoleCode.PRESIDENT, assigned_by=None
                )
            except RoleAlreadyAssignedException as e:
                print(e.message, file=sys.stderr)
                sys.exit(1)
            print(f"Appointed {actor_id} as president (assignment {assignment.id})")

    await database.engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
