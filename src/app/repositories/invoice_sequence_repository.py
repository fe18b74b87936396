"""Invoice Sequence Repository Interface"""

from abc import ABC, abstractmethod


class InvoiceSequenceRepository(ABC):

    @abstractmethod
    async def next_value(self, year: int) -> int:
        """
        Take the next invoice sequence number for a year

        The counter row stays locked until the surrounding transaction ends,
        so two transactions never receive the same value.

        Args:
            year: Calendar year of issue

        Returns:
            Sequence number, starting at 1 for a year without invoices
        """
        pass
