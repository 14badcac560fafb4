"""Settings shared by every provincial dataset."""

from types import MappingProxyType

# Result size -> page count. Up to 10k rows fit on a single page.
RESPONSE_CHUNKS = MappingProxyType({
    10_000: 1,
    50_000: 2,
    150_000: 4,
    500_000: 5,
})

# Stored timestamp layouts
LAYOUT_12_HOUR = "%Y-%m-%d %-I:%M:00.000 %p"  # 2002-05-16 3:00:00.000 PM
LAYOUT_24_HOUR = "%Y-%m-%d %H:%M:00.000"      # 2000-08-17 00:00:00.000
LAYOUT_DOTTED_DATE = "%Y.%m.%d"               # 1973.10.28
