"""Episode selection and episode range compaction."""

from typing import Iterable, List, Optional, Tuple

from ..models.types import EpisodeInfo, EPISODE_PREFIX, EPISODE_TYPE_ORDER


def _type_order(ep_type: str) -> int:
    return EPISODE_TYPE_ORDER.get(ep_type, len(EPISODE_TYPE_ORDER) + 1)


def representative_episode(episodes: List[EpisodeInfo], anime_id: int) -> Optional[EpisodeInfo]:
    """Episode used for naming: the primary anime's lowest episode.

    Ordered by type then number, except that "Other" sorts before every type.
    """
    own = [e for e in episodes if e["anime_id"] == anime_id]
    if not own:
        return None
    return min(own, key=lambda e: (float("-inf") if e["type"] == "Other" else _type_order(e["type"]), e["number"]))


def _pad(n: int, pad: int) -> str:
    return str(n).zfill(pad)


def _compact_run(prefix: str, numbers: List[int], pad: int) -> str:
    tokens: List[str] = []
    start = prev = numbers[0]
    for n in numbers[1:] + [None]:
        if n is not None and n == prev + 1:
            prev = n
            continue
        token = prefix + _pad(start, pad)
        if prev != start:
            token += "-" + _pad(prev, pad)
        tokens.append(token)
        if n is not None:
            start = prev = n
    return " ".join(tokens)


def episode_range(episodes: Iterable[Tuple[str, int]], pad: int = 0) -> str:
    """Compact (type, number) pairs into a string like "01-03 05 S01".

    Types are emitted in EpisodeType order. Consecutive numbers merge into
    `start-end`, the prefix is written once and both ends are zero-padded.
    """
    by_type: dict = {}
    for ep_type, number in episodes:
        by_type.setdefault(ep_type, []).append(int(number))
    parts = [
        _compact_run(EPISODE_PREFIX.get(ep_type, ""), sorted(numbers), pad)
        for ep_type, numbers in sorted(by_type.items(), key=lambda kv: _type_order(kv[0]))
    ]
    return " ".join(p for p in parts if p).strip()


def episode_numbers(episodes: List[EpisodeInfo], anime_id: int, pad: int = 0) -> str:
    return episode_range(((e["type"], e["number"]) for e in episodes if e["anime_id"] == anime_id), pad)
