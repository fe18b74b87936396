"""Time Entry API Routes

Read access to entries that can still be invoiced.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.invoicing import GetUnbilledEntries, TimeEntryDTO
from src.adapter.repositories import SqlAlchemyTimeEntryRepository
from src.depends import get_session

router = APIRouter(prefix="/billing/entries", tags=["Entries"])


@router.get("/unbilled", response_model=List[TimeEntryDTO])
async def get_unbilled_entries(
    client_id: Optional[int] = Query(default=None),
    user_id: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    """
    Unbilled time entries, newest first.

    **Query parameters:**
    - `client_id` (optional): Only entries of this client
    - `user_id` (optional): Only entries of this user
    """
    result = await GetUnbilledEntries(SqlAlchemyTimeEntryRepository(session)).execute(
        client_id=client_id, user_id=user_id
    )
    return result.value
