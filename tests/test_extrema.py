import numpy as np
import pytest

from persistence1d import DetectExtrema, ExtremumType

Min = ExtremumType.Minimum
Max = ExtremumType.Maximum


def _Summary(Data):
    return [(E.Index, E.Type) for E in DetectExtrema(Data)]


@pytest.mark.parametrize("Data", [[], [1.0], [10.0, 20.0], [20.0, 10.0], [3.0, 3.0]])
def test_short_data_has_no_extrema(Data):
    assert DetectExtrema(Data) == []


def test_example_data():
    Data = [2.0, 5.0, 7.0, -12.0, -13.0, -7.0, 10.0, 18.0, 6.0, 8.0, 7.0, 4.0]
    assert _Summary(Data) == [(0, Min), (2, Max), (4, Min), (7, Max), (8, Min), (9, Max), (11, Min)]
    assert DetectExtrema(Data)[3].Value == 18.0


def test_boundary_samples_are_never_maxima():
    assert _Summary([5.0, 1.0, 5.0]) == [(1, Min)]
    assert _Summary([1.0, 2.0, 3.0]) == [(0, Min)]
    assert _Summary([3.0, 2.0, 1.0]) == [(2, Min)]


def test_plateaus():
    #~ Leftmost sample of a flat valley, rightmost sample of a flat peak
    assert _Summary([5.0, 0.0, 0.0, 5.0]) == [(1, Min)]
    assert _Summary([0.0, 5.0, 5.0, 0.0]) == [(0, Min), (2, Max), (3, Min)]
    assert _Summary([4.0, 4.0, 4.0, 4.0]) == [(0, Min)]
    #~ Staircase: no extrema inside
    assert _Summary([0.0, 1.0, 1.0, 2.0]) == [(0, Min)]


def test_extrema_alternate_and_start_and_end_with_minimum():
    Rng = np.random.default_rng(7)
    for _ in range(20):
        Data = Rng.integers(0, 5, size=int(Rng.integers(3, 60))).astype(float)
        Types = [E.Type for E in DetectExtrema(Data)]
        assert len(Types) % 2 == 1
        assert Types[0] == Min and Types[-1] == Min
        assert all(a != b for a, b in zip(Types, Types[1:]))


def test_input_is_not_modified():
    Data = np.array([3.0, 1.0, 2.0, 0.0])
    DetectExtrema(Data)
    assert Data.tolist() == [3.0, 1.0, 2.0, 0.0]


def test_descending_flat_step_has_minimum_and_maximum():
    assert _Summary([2.0, 1.0, 1.0, 0.0]) == [(1, Min), (2, Max), (3, Min)]
    assert _Summary([2.0, 1.0, 1.0, 1.0, 0.0]) == [(1, Min), (3, Max), (4, Min)]
