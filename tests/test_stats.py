import math

import pytest

from secretmaker.generator import COMBINED, generate_batch
from secretmaker.stats import (
    analyze_secrets,
    chi_squared,
    chi_squared_p_value,
    estimate_entropy,
    pool_shares,
    tabulate_positions,
    tabulate_usage,
)

def test_entropy_increases_with_length():
    assert estimate_entropy(0) == 0.0
    assert estimate_entropy(92) > estimate_entropy(4)
    assert estimate_entropy(1) == pytest.approx(math.log2(92))

def test_usage_counts_every_pool_character():
    usage = tabulate_usage(["1a!", "1bA"])
    assert usage["1"] == 2
    assert usage["a"] == 1
    assert usage["!"] == 1
    assert usage["Z"] == 0
    assert set(COMBINED) <= set(usage)

def test_positions_per_character():
    table = tabulate_positions(["ab", "ba", "ac"])
    assert table["a"] == [2, 1]
    assert table["b"] == [1, 1]
    assert table["c"] == [0, 1]
    assert len(table) == len(COMBINED)

def test_positions_require_same_length():
    with pytest.raises(ValueError):
        tabulate_positions(["abc", "ab"])
    with pytest.raises(ValueError):
        tabulate_positions([])

def test_pool_shares():
    shares = pool_shares(["1aA!", "2bB#"])
    for name in ("numbers", "lower", "upper", "special"):
        assert shares[name]["observed"] == pytest.approx(0.25)
        assert shares[name]["count"] == 2
    assert shares["numbers"]["expected"] == pytest.approx(10 / 92)
    assert shares["special"]["expected"] == pytest.approx(30 / 92)

def test_chi_squared_basics():
    assert chi_squared([10, 10, 10]) == 0.0
    assert chi_squared([20, 0], [10, 10]) == pytest.approx(20.0)
    with pytest.raises(ValueError):
        chi_squared([1, 2], [1])
    with pytest.raises(ValueError):
        chi_squared([])

def test_p_value_approximation():
    assert chi_squared_p_value(0.0, 5) == 1.0
    # 11.07 is the 5% critical value for df=5
    assert chi_squared_p_value(11.07, 5) == pytest.approx(0.05, abs=0.01)
    assert chi_squared_p_value(100.0, 5) < 1e-6
    with pytest.raises(ValueError):
        chi_squared_p_value(1.0, 0)

def test_analyze_generated_batch():
    batch = generate_batch(200, 92)
    result = analyze_secrets(batch)
    assert result["count"] == 200
    assert result["length"] == 92
    assert result["last_secret"] == batch[-1]
    assert result["df"] == len(COMBINED) - 1
    assert result["usage_mean"] == pytest.approx(200)
    assert result["usage_stdev"] > 0
    assert 0.0 <= result["p_value"] <= 1.0
    assert result["worst_position_char"] in COMBINED
    assert result["positional_stdev_max"] >= result["positional_stdev_mean"]
    # each pool stays close to its natural share at this length
    for share in result["pool_shares"].values():
        assert share["observed"] == pytest.approx(share["expected"], abs=0.02)

def test_analyze_single_character_positions():
    result = analyze_secrets(["1aA!"])
    assert result["length"] == 4
    assert result["entropy_bits"] == pytest.approx(4 * math.log2(92))
