"""Abstract location collaborators: channel mapping and the location directory."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockalloc.domain.model.ledger import StockLocation


class SalesChannelLocations(ABC):

    @abstractmethod
    async def list_locations(self, sales_channel_id: str) -> list[str]:
        """Return the location ids serving a sales channel, in a stable order."""


class StockLocationDirectory(ABC):

    @abstractmethod
    async def list(self) -> list[StockLocation]:
        """Return every known stock location, in a stable order."""
