"""
Tests for volatility calculation utilities.
Pure functions with synthetic data where standard deviation is known.
"""

import pytest
import numpy as np
import math

from analysis.calculations.volatility import (
    sample_std,
    annualized_volatility
)


class TestSampleStd:
    """Tests for Bessel-corrected standard deviation."""

    def test_sample_std_known_values(self):
        """Values 1..5: mean 3, squared deviations sum 10, variance 10/4."""
        result = sample_std([1.0, 2.0, 3.0, 4.0, 5.0])

        assert abs(result - math.sqrt(2.5)) < 1e-12

    def test_sample_std_matches_numpy_ddof1(self):
        """Agrees with numpy's sample standard deviation."""
        values = [0.012, -0.004, 0.007, -0.011, 0.003, 0.0]

        assert sample_std(values) == pytest.approx(np.std(values, ddof=1), rel=1e-12)

    def test_sample_std_single_value(self):
        """One observation clamps the divisor to 1 and gives 0, not NaN."""
        assert sample_std([0.05]) == 0.0

    def test_sample_std_empty(self):
        assert sample_std([]) == 0.0


class TestAnnualizedVolatility:
    """Tests for annualized volatility."""

    def test_annualized_volatility_scaling(self):
        """Daily std scaled by sqrt(252)."""
        returns = [0.01, -0.01, 0.01, -0.01]
        daily_std = np.std(returns, ddof=1)

        result = annualized_volatility(returns, freq=252)

        assert result == pytest.approx(daily_std * math.sqrt(252), rel=1e-12)

    def test_annualized_volatility_custom_freq(self):
        returns = [0.02, -0.01, 0.03]

        weekly = annualized_volatility(returns, freq=52)
        daily = annualized_volatility(returns, freq=252)

        assert weekly / daily == pytest.approx(math.sqrt(52 / 252), rel=1e-12)

    def test_annualized_volatility_flat_series(self):
        """Constant zero returns have zero volatility."""
        assert annualized_volatility([0.0, 0.0, 0.0]) == 0

    def test_annualized_volatility_empty(self):
        assert annualized_volatility([]) == 0

    def test_annualized_volatility_non_negative(self):
        returns = [-0.03, -0.02, -0.05, -0.01]

        assert annualized_volatility(returns) >= 0
