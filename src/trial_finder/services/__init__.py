"""Query construction, response normalization, and derived-data helpers."""
