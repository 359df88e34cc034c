"""Tests for stlkit.smoothing.fast_loess."""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from stlkit.errors import InvalidInputError, PrimitiveFailureError
from stlkit.smoothing.fast_loess import DEFAULT_SAMPLE_BUDGET, FastLoess, sample_indices
from stlkit.smoothing.loess import Loess


class RecordingSmoother:
    """Stub smoother that records what it was fitted on."""

    instances: list["RecordingSmoother"] = []

    def __init__(self, x, y, is_temporal=True, window=None):
        self.x = np.asarray(x, dtype=float)
        self.y = np.asarray(y, dtype=float)
        self.is_temporal = is_temporal
        self.window = window
        self.n_args = 3 if window is None else 4
        self.queries: list[float] = []
        RecordingSmoother.instances.append(self)

    def estimate_all(self):
        return self.y.copy()

    def estimate_at(self, x):
        self.queries.append(x)
        return 10.0 * x


@pytest.fixture(autouse=True)
def _reset_recording():
    RecordingSmoother.instances = []


def test_default_sample_budget():
    """Tests that the default sample budget is 100."""
    assert DEFAULT_SAMPLE_BUDGET == 100


def test_short_input_matches_direct_loess_exactly():
    """Tests that inputs within the budget take the exact path."""
    rng = np.random.default_rng(11)
    x = np.arange(80.0)
    y = np.cos(x / 6.0) + 0.2 * rng.normal(size=80)

    fast = FastLoess(x, y, window=9)
    direct = Loess(x, y, window=9)

    assert not fast.sampled
    assert_array_equal(fast.estimate(), direct.estimate_all())
    assert fast.estimate_at(-1.0) == direct.estimate_at(-1.0)


def test_input_equal_to_budget_is_not_sampled():
    """Tests that exactly sample_budget points are fitted in full."""
    fast = FastLoess(np.arange(100.0), np.zeros(100), window=9)
    assert not fast.sampled


def test_sample_indices_follow_truncated_stride():
    """Tests the uniform-stride sample positions."""
    idx = sample_indices(250, 100)
    assert idx.shape == (100,)
    assert idx[:5].tolist() == [0, 2, 5, 7, 10]
    assert idx[-1] == 247
    assert np.all(np.diff(idx) > 0)


def test_long_input_fits_on_sample_and_evaluates_everywhere():
    """Tests that long inputs are thinned before fitting."""
    x = np.arange(250.0)
    y = np.arange(250.0) * 3.0
    fast = FastLoess(x, y, window=7, smoother_cls=RecordingSmoother)

    assert fast.sampled
    (stub,) = RecordingSmoother.instances
    assert stub.x.size == 100
    assert_array_equal(stub.x, x[sample_indices(250, 100)])
    assert_array_equal(stub.y, y[sample_indices(250, 100)])
    assert stub.window == 7

    out = fast.estimate()
    assert out.shape == (250,)
    assert_allclose(out, 10.0 * x)
    assert stub.queries == x.tolist()


def test_sampled_fit_reproduces_linear_trend():
    """Tests that the sampled path still recovers a straight line at all points."""
    x = np.arange(1000.0)
    y = 0.25 * x - 4.0
    fast = FastLoess(x, y, window=9)
    assert fast.sampled
    assert_allclose(fast.estimate(), y, atol=1e-8)


def test_custom_sample_budget():
    """Tests that the budget can be lowered."""
    fast = FastLoess(np.arange(30.0), np.zeros(30), sample_budget=10,
                     smoother_cls=RecordingSmoother)
    assert fast.sampled
    assert RecordingSmoother.instances[0].x.tolist() == [0.0, 3.0, 6.0, 9.0, 12.0,
                                                         15.0, 18.0, 21.0, 24.0, 27.0]


def test_window_is_omitted_when_not_given():
    """Tests that the smoother picks its own default window."""
    FastLoess(np.arange(5.0), np.zeros(5), smoother_cls=RecordingSmoother)
    assert RecordingSmoother.instances[0].n_args == 3


def test_estimate_is_computed_once():
    """Tests that the estimate is cached on the instance."""
    fast = FastLoess(np.arange(10.0), np.arange(10.0), window=5)
    first = fast.estimate()
    assert fast.estimate() is first
    assert fast.y is first


def test_estimate_at_delegates_to_smoother():
    """Tests that estimate_at forwards to the fitted model."""
    fast = FastLoess(np.arange(5.0), np.zeros(5), smoother_cls=RecordingSmoother)
    assert fast.estimate_at(-1.0) == -10.0
    assert fast.estimate_at(5.0) == 50.0


def test_mismatched_lengths_raise():
    """Tests that x and y must have the same length."""
    with pytest.raises(InvalidInputError):
        FastLoess(np.arange(5.0), np.zeros(4))


def test_too_short_input_raises_primitive_failure():
    """Tests that the smoother's rejection propagates unchanged."""
    with pytest.raises(PrimitiveFailureError):
        FastLoess([0.0], [1.0])


def test_non_positive_budget_raises():
    """Tests that the sample budget must be positive."""
    with pytest.raises(InvalidInputError):
        FastLoess(np.arange(5.0), np.zeros(5), sample_budget=0)


def test_budget_of_one_is_rejected():
    """Tests that FastLoess and StlConfig share the same budget floor."""
    with pytest.raises(InvalidInputError):
        FastLoess(np.arange(5.0), np.zeros(5), sample_budget=1)
    FastLoess(np.arange(5.0), np.arange(5.0), sample_budget=2).estimate()


class PickySmoother:
    """Stub smoother that rejects short inputs with a plain ValueError."""

    def __init__(self, x, y, is_temporal=True, window=None):
        if len(x) < 5:
            raise ValueError("need at least 5 points")
        self.n = len(x)

    def estimate_all(self):
        return np.zeros(self.n)

    def estimate_at(self, x):
        raise ZeroDivisionError("no extrapolation")


class TruncatingSmoother(PickySmoother):
    """Stub smoother whose estimate_all drops the last point."""

    def estimate_all(self):
        return np.zeros(self.n - 1)


def test_foreign_value_error_becomes_primitive_failure():
    """Tests that a third-party ValueError is reported as a primitive failure."""
    with pytest.raises(PrimitiveFailureError, match="need at least 5 points") as info:
        FastLoess(np.arange(3.0), np.zeros(3), smoother_cls=PickySmoother)
    assert isinstance(info.value.__cause__, ValueError)


def test_foreign_arithmetic_error_becomes_primitive_failure():
    """Tests that arithmetic errors from estimate_at are reported as primitive failures."""
    fast = FastLoess(np.arange(6.0), np.zeros(6), smoother_cls=PickySmoother)
    with pytest.raises(PrimitiveFailureError, match="no extrapolation"):
        fast.estimate_at(-1.0)


def test_wrong_length_estimate_all_is_primitive_failure():
    """Tests that estimate_all must return one value per input x."""
    fast = FastLoess(np.arange(6.0), np.zeros(6), smoother_cls=TruncatingSmoother)
    with pytest.raises(PrimitiveFailureError, match="shape"):
        fast.estimate()
