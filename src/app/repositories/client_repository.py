"""Client and Phase Repository Interfaces

Read-only lookups used to label invoices and their items.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional
from src.domain.client import Client


class ClientRepository(ABC):

    @abstractmethod
    async def get_by_id(self, client_id: int) -> Optional[Client]:
        pass


class PhaseRepository(ABC):

    @abstractmethod
    async def get_names(self, phase_ids: Iterable[int]) -> Dict[int, str]:
        """Map of phase ID to display name; unknown IDs are absent"""
        pass
