"""Invoice Settings Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.invoice_settings import InvoiceSettings


class InvoiceSettingsRepository(ABC):

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> Optional[InvoiceSettings]:
        """
        Retrieve invoicing defaults of a user

        Returns:
            InvoiceSettings if the user saved any, None otherwise
        """
        pass
