"""SQLAlchemy Client and Phase Repository Implementations"""

from typing import Dict, Iterable, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.client_repository import ClientRepository, PhaseRepository
from src.domain.client import Client, Phase


class SqlAlchemyClientRepository(ClientRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, client_id: int) -> Optional[Client]:
        statement = select(Client).where(Client.id == client_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()


class SqlAlchemyPhaseRepository(PhaseRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_names(self, phase_ids: Iterable[int]) -> Dict[int, str]:
        ids = {phase_id for phase_id in phase_ids if phase_id is not None}
        if not ids:
            return {}

        statement = select(Phase).where(Phase.id.in_(ids))
        result = await self.session.execute(statement)
        return {phase.id: phase.name for phase in result.scalars().all()}
