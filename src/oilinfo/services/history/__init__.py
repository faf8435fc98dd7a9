"""Historical price trend service package."""

from oilinfo.services.history.service import (
    HistoryService,
    date_labels,
    generate_trend,
    thai_short_date,
)


__all__ = [
    "HistoryService",
    "date_labels",
    "generate_trend",
    "thai_short_date",
]
