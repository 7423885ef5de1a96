"""
secretmaker.stats

Batch statistics used to look for weaknesses in generated secrets:
- tabulate_usage(secrets): total occurrences of each character
- tabulate_positions(secrets): per-character counts at each position
- pool_shares(secrets): observed vs expected share of each sub-pool
- chi_squared / chi_squared_p_value: goodness of fit against uniform
- index_distribution(provider, high, draws): histogram of raw index draws
- analyze_secrets(secrets): everything above rolled into one dict
"""

import math
import statistics
from collections import Counter
from typing import Dict, List, Optional, Sequence

from .generator import COMBINED, POOL_NAMES, SUB_POOLS
from .randindex import RandomIndexProvider


def _check_batch(secrets: Sequence[str]) -> int:
    """Return the shared secret length, or raise ValueError."""
    if not secrets:
        raise ValueError("at least one secret is required")
    lengths = {len(s) for s in secrets}
    if len(lengths) != 1:
        raise ValueError(f"secrets must all have the same length, got {sorted(lengths)}")
    return lengths.pop()


def estimate_entropy(length: int, pool_size: int = len(COMBINED)) -> float:
    """Entropy bits of a uniformly drawn string: length * log2(pool_size)."""
    if length <= 0:
        return 0.0
    return length * math.log2(pool_size)


def tabulate_usage(secrets: Sequence[str]) -> Counter:
    """Count every character across the batch. Characters never drawn are present with 0."""
    usage = Counter({c: 0 for c in COMBINED})
    for s in secrets:
        usage.update(s)
    return usage


def tabulate_positions(secrets: Sequence[str]) -> Dict[str, List[int]]:
    """
    For each pool character, how often it appeared at each position.
    Characters outside COMBINED are ignored.
    """
    length = _check_batch(secrets)
    table = {c: [0] * length for c in COMBINED}
    for s in secrets:
        for pos, c in enumerate(s):
            row = table.get(c)
            if row is not None:
                row[pos] += 1
    return table


def pool_shares(secrets: Sequence[str]) -> Dict[str, Dict[str, float]]:
    """Observed and expected fraction of characters coming from each sub-pool."""
    total = sum(len(s) for s in secrets)
    usage = tabulate_usage(secrets)
    out = {}
    for name, pool in zip(POOL_NAMES, SUB_POOLS):
        observed = sum(usage[c] for c in pool)
        out[name] = {
            "observed": observed / total if total else 0.0,
            "expected": len(pool) / len(COMBINED),
            "count": observed,
        }
    return out


def chi_squared(observed: Sequence[int], expected: Optional[Sequence[float]] = None) -> float:
    """
    Pearson chi-squared statistic. With no expected counts the observations
    are tested against a uniform distribution.
    """
    if not observed:
        raise ValueError("observed counts are empty")
    if expected is None:
        mean = sum(observed) / len(observed)
        expected = [mean] * len(observed)
    if len(expected) != len(observed):
        raise ValueError("observed and expected must have the same length")
    stat = 0.0
    for o, e in zip(observed, expected):
        if e <= 0:
            raise ValueError("expected counts must be positive")
        stat += (o - e) ** 2 / e
    return stat


def chi_squared_p_value(stat: float, df: int) -> float:
    """
    Upper-tail p-value of the chi-squared distribution, using the
    Wilson-Hilferty cube-root normal approximation.
    """
    if df <= 0:
        raise ValueError("df must be > 0")
    if stat <= 0:
        return 1.0
    k = 2.0 / (9.0 * df)
    z = ((stat / df) ** (1.0 / 3.0) - (1.0 - k)) / math.sqrt(k)
    return 0.5 * math.erfc(z / math.sqrt(2.0))


def index_distribution(provider: RandomIndexProvider, high: int, draws: int) -> List[int]:
    """Histogram of provider.random_index_in_range(high) over draws calls."""
    if high < 0:
        raise ValueError("high must be >= 0")
    counts = [0] * (high + 1)
    for _ in range(draws):
        counts[provider.random_index_in_range(high)] += 1
    return counts


def analyze_secrets(secrets: Sequence[str]) -> Dict:
    """
    Summary statistics for a batch of same-length secrets.

    Returns a dict:
    {
        "count": int,
        "length": int,
        "last_secret": str,
        "usage_mean": float,          # mean occurrences per pool character
        "usage_stdev": float,         # spread of those occurrences
        "positional_stdev_mean": float,
        "positional_stdev_max": float,
        "worst_position_char": str,   # character with the most uneven placement
        "chi_squared": float,         # usage vs uniform
        "df": int,
        "p_value": float,
        "pool_shares": {...},
        "entropy_bits": float,
    }
    """
    length = _check_batch(secrets)
    usage = tabulate_usage(secrets)
    counts = [usage[c] for c in COMBINED]

    positions = tabulate_positions(secrets)
    # a single position has no spread to measure
    if length > 1:
        pos_stdev = {c: statistics.pstdev(row) for c, row in positions.items()}
    else:
        pos_stdev = {c: 0.0 for c in positions}
    worst = max(pos_stdev, key=pos_stdev.get)

    stat = chi_squared(counts)
    df = len(counts) - 1

    return {
        "count": len(secrets),
        "length": length,
        "last_secret": secrets[-1],
        "usage_mean": statistics.mean(counts),
        "usage_stdev": statistics.pstdev(counts),
        "positional_stdev_mean": statistics.mean(pos_stdev.values()),
        "positional_stdev_max": pos_stdev[worst],
        "worst_position_char": worst,
        "chi_squared": stat,
        "df": df,
        "p_value": chi_squared_p_value(stat, df),
        "pool_shares": pool_shares(secrets),
        "entropy_bits": estimate_entropy(length),
    }
