"""SQLAlchemy Invoice Settings Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_settings_repository import InvoiceSettingsRepository
from src.domain.invoice_settings import InvoiceSettings


class SqlAlchemyInvoiceSettingsRepository(InvoiceSettingsRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: str) -> Optional[InvoiceSettings]:
        statement = select(InvoiceSettings).where(InvoiceSettings.user_id == user_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
