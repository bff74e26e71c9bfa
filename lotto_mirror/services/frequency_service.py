"""Number frequency ranking over whatever draws are cached."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from lotto_mirror.models.draw import Draw


@dataclass(frozen=True)
class NumberCount:
    num: int
    count: int


@dataclass(frozen=True)
class FrequencyRanking:
    counts: list[NumberCount]
    ranking: list[NumberCount]
    top6: list[int]
    next6: list[int]
    top18: list[int]
    has_data: bool


def build_ranking(draws: Iterable[Draw], include_bonus: bool = False) -> FrequencyRanking:
    """Count how often each of 1..45 was drawn.

    ``ranking`` is ordered by count descending, ties by number ascending, so
    the result only depends on the multiset of draws.
    """

    tally: dict[int, int] = {n: 0 for n in range(1, 46)}
    for d in draws:
        for n in d.numbers:
            if 1 <= n <= 45:
                tally[n] += 1
        if include_bonus and 1 <= d.bonus <= 45:
            tally[d.bonus] += 1

    counts = [NumberCount(num=n, count=c) for n, c in tally.items()]
    ranking = sorted(counts, key=lambda item: (-item.count, item.num))
    ranked_nums = [item.num for item in ranking]

    return FrequencyRanking(
        counts=counts,
        ranking=ranking,
        top6=ranked_nums[:6],
        next6=ranked_nums[6:12],
        top18=ranked_nums[:18],
        has_data=ranking[0].count > 0,
    )
