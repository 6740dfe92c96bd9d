"""Domain service: Location Resolver.

Turns a reservation or availability context into stock location ids.
Ordering comes from the collaborators and is kept as-is, so "the first
location" is stable regardless of who is asking.
"""

from __future__ import annotations

import logging

from stockalloc.domain.exceptions import LocationRequiredError, NoLocationForChannelError
from stockalloc.domain.repository.locations import (
    SalesChannelLocations,
    StockLocationDirectory,
)

logger = logging.getLogger(__name__)


class LocationResolver:

    def __init__(
        self,
        channel_locations: SalesChannelLocations,
        location_directory: StockLocationDirectory,
    ) -> None:
        self._channel_locations = channel_locations
        self._location_directory = location_directory

    async def eligible_locations(
        self,
        location_id: str | None = None,
        sales_channel_id: str | None = None,
    ) -> list[str]:
        """Every location the request may draw stock from.

        An explicit location wins, then the sales channel's locations,
        then every known location ("orderable anywhere").
        """
        if location_id is not None:
            return [location_id]
        if sales_channel_id is not None:
            return await self._channel_location_ids(sales_channel_id)
        locations = await self._location_directory.list()
        return [location.id for location in locations]

    async def single_location(
        self,
        location_id: str | None = None,
        sales_channel_id: str | None = None,
    ) -> str:
        """The one location a reservation should be placed at."""
        if location_id is not None:
            return location_id
        if sales_channel_id is not None:
            return (await self._channel_location_ids(sales_channel_id))[0]

        locations = await self._location_directory.list()
        if len(locations) != 1:
            raise LocationRequiredError(
                "Must provide a location_id, or a sales_channel_id for a sales "
                f"channel with associated stock locations ({len(locations)} locations known)"
            )
        logger.debug("Defaulting to sole stock location %s", locations[0].id)
        return locations[0].id

    async def _channel_location_ids(self, sales_channel_id: str) -> list[str]:
        location_ids = await self._channel_locations.list_locations(sales_channel_id)
        if not location_ids:
            raise NoLocationForChannelError(sales_channel_id)
        return list(location_ids)
