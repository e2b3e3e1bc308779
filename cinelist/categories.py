"""
Category headers emitted by the analysis template.
They describe groups of tropes, not tropes themselves, so extraction drops them.
"""

from typing import AbstractSet

CATEGORY_HEADERS: AbstractSet[str] = frozenset({
	"Coming of Age & First Love",
	"Historical & Period Dramas",
	"Age Gaps & Power Imbalances",
	"Supernatural & Sci-Fi Sapphics",
	"Religious Struggles & Conversion",
	"Family-Friendly",
	"Horror & Survival Thrillers",
	"Mainstream WLW",
	"Tragic & Doomed Romance",
	"Happy & Healthy WLW",
})


def is_category_header(line: str, headers: AbstractSet[str] = CATEGORY_HEADERS) -> bool:
	"""True when `line` equals or contains one of `headers` (case-sensitive)."""
	return any(header in line for header in headers)
