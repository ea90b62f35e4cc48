"""Sorting, pagination and dashboard derivations over the record list."""
import math
from datetime import date, datetime, timedelta, timezone
from typing import List, Sequence, Tuple

from echochamber.models.media import MediaRecord, UploadHistogram

SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"

DASHBOARD_LIST_SIZE = 5
HISTOGRAM_DAYS = 30


def sort_records(records: Sequence[MediaRecord], sort_key: str) -> List[MediaRecord]:
    """Sort by upload time; unknown keys keep input order."""
    if sort_key == SORT_NEWEST:
        return sorted(records, key=lambda r: r.upload_timestamp, reverse=True)
    if sort_key == SORT_OLDEST:
        return sorted(records, key=lambda r: r.upload_timestamp)
    return list(records)


def paginate(
    records: Sequence[MediaRecord], page: int, page_size: int
) -> Tuple[List[MediaRecord], int]:
    """Return (slice for page, total pages). Pages are 1-based; out of range is empty."""
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    total_pages = math.ceil(len(records) / page_size)
    if page < 1:
        return [], total_pages
    offset = (page - 1) * page_size
    return list(records[offset:offset + page_size]), total_pages


def top_popular(records: Sequence[MediaRecord], n: int = DASHBOARD_LIST_SIZE) -> List[MediaRecord]:
    # sorted() is stable, so ties keep store order
    return sorted(records, key=lambda r: r.play_count, reverse=True)[:n]


def newest(records: Sequence[MediaRecord], n: int = DASHBOARD_LIST_SIZE) -> List[MediaRecord]:
    return sort_records(records, SORT_NEWEST)[:n]


def utc_date(timestamp: int) -> date:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date()


def upload_histogram(
    records: Sequence[MediaRecord], today: date, days: int = HISTOGRAM_DAYS
) -> UploadHistogram:
    """Uploads per UTC calendar day for the trailing window ending at today (inclusive)."""
    first = today - timedelta(days=days - 1)
    counts = {first + timedelta(days=i): 0 for i in range(days)}
    for r in records:
        try:
            d = utc_date(r.upload_timestamp)
        except (OverflowError, OSError, ValueError):
            continue
        if d in counts:
            counts[d] += 1
    return UploadHistogram(
        labels=[d.isoformat() for d in counts],
        counts=list(counts.values()),
    )
