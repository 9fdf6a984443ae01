"""
Notes API — User Store (read-only)
===================================

What:  Lookups against the `users` table.
Who:   Used by NoteService to check note owners and resolve usernames.
"""

from typing import Dict, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.models.user import User


class UserStore:
    """Read access to users. This backend never writes users."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def find_by_ids(self, user_ids: Iterable[str]) -> Dict[str, User]:
        """
        Fetch many users in one query.

        Returns a mapping of id → User. Ids with no matching user are simply
        absent from the mapping.
        """
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self.session.execute(select(User).where(User.id.in_(ids)))
        return {user.id: user for user in result.scalars().all()}
