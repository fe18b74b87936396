"""Get Unbilled Entries Use Case

Lists time entries that can still be put on an invoice.
"""

from typing import List, Optional
from libs.result import Result, Return
from src.app.repositories.time_entry_repository import TimeEntryRepository
from .dtos import TimeEntryDTO
from .mappers import to_entry_dto


class GetUnbilledEntries:
    """
    Read-only: unbilled entries, newest first, optionally for one client
    """

    def __init__(self, entry_repo: TimeEntryRepository):
        self.entry_repo = entry_repo

    async def execute(
        self, client_id: Optional[int] = None, user_id: Optional[str] = None
    ) -> Result[List[TimeEntryDTO]]:
        """
        List unbilled entries

        Args:
            client_id: Optional client filter
            user_id: Optional owner filter

        Returns:
            Result[List[TimeEntryDTO]]: Entries ordered by date and start time, descending
        """
        entries = await self.entry_repo.get_unbilled(client_id=client_id, user_id=user_id)
        return Return.ok([to_entry_dto(entry) for entry in entries])
