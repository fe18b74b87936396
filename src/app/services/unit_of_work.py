"""Unit of Work Interface

Groups repository writes into one transaction.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Transaction boundary for a single use case execution

    Repositories only flush; nothing is durable until commit().
    Leaving the context without commit rolls everything back.
    """

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
