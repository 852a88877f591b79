# coinhours/core/hours_layer/ordering.py
# Stable high-to-low ordering of coin amounts.
#
# Used by the proportional distributor when there are fewer hours than
# outputs: the outputs holding the most coins receive the available hours.
# Equal amounts keep their original relative order, so the permutation is
# identical on every peer.

from __future__ import annotations

from typing import List, Sequence, Tuple


def sort_indices_descending(values: Sequence[int]) -> Tuple[int, ...]:
    """
    Return the original indices of `values` ordered by value, highest first.

    Ties keep their input order. sorted() is stable and stays stable with
    reverse=True, so equal values are never swapped.

    Example:
        sort_indices_descending([5, 50, 1])  -> (1, 0, 2)
        sort_indices_descending([3, 7, 3])   -> (1, 0, 2)
    """
    pairs: List[Tuple[int, int]] = [
        (value, index) for index, value in enumerate(values)
    ]
    ranked = sorted(pairs, key=lambda pair: pair[0], reverse=True)
    return tuple(index for _, index in ranked)


__all__ = ["sort_indices_descending"]
