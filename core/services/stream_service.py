"""Ordering repair for Unsplash photo streams.

The media library requires every record to have a unique ID and requires
records to be sorted by date. The Unsplash listing stream breaks both rules
with sponsored photos: they repeat IDs and carry no usable timestamp. Search
results are sorted by relevance instead of date.

Listing pages are repaired by giving each sponsored record its neighbour's
timestamp and appending that timestamp to its ID. Search pages get synthetic
dates derived from their position in the result stream.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from itertools import count

from loguru import logger

from core.models import ImageRecord

# Must exceed the number of results a session can page through.
SEARCH_DATE_BASE = 10**8

# Date given to a sponsored record when the page has no dated record at all.
UNDATED_EPOCH = 0


class RepairState(Enum):
    AWAITING_FIRST_DATE = "awaiting-first-date"
    HAS_PREVIOUS_DATE = "has-previous-date"


class AdDateRepair:
    """Streaming date/ID repair, fed one record at a time.

    Holds at most one record waiting for a date while no dated record has
    been seen yet.
    """

    def __init__(self) -> None:
        self.state = RepairState.AWAITING_FIRST_DATE
        self.previous_date: int | None = None
        self.pending: ImageRecord | None = None

    def feed(self, record: ImageRecord) -> ImageRecord:
        """Repair `record` (or hold it for later) and return it."""
        if not record.has_date:
            if self.state is RepairState.HAS_PREVIOUS_DATE:
                assert self.previous_date is not None
                self._assign(record, self.previous_date)
            else:
                if self.pending is not None:
                    self._fall_back(self.pending)
                self.pending = record
            return record

        self.previous_date = record.date
        self.state = RepairState.HAS_PREVIOUS_DATE
        if self.pending is not None:
            self._assign(self.pending, record.date)
            self.pending = None
        return record

    def finish(self) -> ImageRecord | None:
        """Close the stream; return the record that never got a date, if any."""
        leftover = self.pending
        if leftover is not None:
            self._fall_back(leftover)
            self.pending = None
        return leftover

    @staticmethod
    def _fall_back(record: ImageRecord) -> None:
        logger.warning(
            "No dated photo to borrow from; {} falls back to epoch {}",
            record.id,
            UNDATED_EPOCH,
        )
        record.date = UNDATED_EPOCH

    @staticmethod
    def _assign(record: ImageRecord, timestamp: int) -> None:
        record.id = f"{record.id}{timestamp}"
        record.set_date(timestamp)


class StreamService:
    """Applies ordering repairs to mapped records."""

    def normalize_listing(self, records: Iterable[ImageRecord]) -> list[ImageRecord]:
        """Repair a listing page in input order."""
        repair = AdDateRepair()
        items = [repair.feed(record) for record in records]
        repair.finish()
        return items

    def assign_search_dates(
        self,
        records: Iterable[ImageRecord],
        page: int,
        per_page: int,
        positions: Iterable[int] | None = None,
    ) -> list[ImageRecord]:
        """Give search results synthetic dates from their stream position.

        `positions` are the records' indexes in the raw page; by default the
        records are taken to be consecutive. Only `date` is overwritten, so
        `date_formatted` still shows the real date to the user.
        """
        items: list[ImageRecord] = []
        start = page * per_page - 1
        for offset, record in zip(count() if positions is None else positions, records):
            record.date = SEARCH_DATE_BASE - (start - offset)
            items.append(record)
        return items
