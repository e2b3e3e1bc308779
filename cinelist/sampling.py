"""
Random sampling of catalog entries for the "browse" view.
"""

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def sample_entries(entries: Sequence[T], count: int, rng: Optional[random.Random] = None) -> List[T]:
	"""
	Return `count` entries drawn without replacement, in random order.

	A Fisher-Yates shuffle of a copy, truncated to the first `count` items.
	Asking for more entries than exist returns all of them shuffled.
	Not suitable for anything security related.
	"""
	rng = rng or random.Random()
	shuffled = list(entries)  # never mutate the caller's sequence

	for i in range(len(shuffled) - 1, 0, -1):
		j = rng.randint(0, i)  # inclusive bounds
		shuffled[i], shuffled[j] = shuffled[j], shuffled[i]

	if count <= 0:
		return []
	return shuffled[:count]
