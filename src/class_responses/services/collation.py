"""Name collation used to order assignment submissions."""

from collections.abc import Callable
from functools import lru_cache
from itertools import takewhile

from pyuca import Collator

CollationKey = Callable[[str], object]


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def default_collation_key(value: str) -> tuple[int, ...]:
    """Primary-strength Unicode collation key, ignoring case and accents.

    Letters such as Ł or Ø sort with their base letter, as in the default
    Unicode collation table.
    """
    sort_key = _collator().sort_key(value)
    return tuple(takewhile(lambda weight: weight != 0, sort_key))
