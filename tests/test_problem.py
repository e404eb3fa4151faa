import numpy as np
import pytest

from tsplib_bench import NearestNeighbours, ProblemType, TSPLIBProblem, WeightType


def make(weights, problem_type=ProblemType.ATSP, name="p"):
    w = np.asarray(weights, dtype=float)
    return TSPLIBProblem(name, "", w.shape[0], w, WeightType.EXPLICIT, problem_type)


@pytest.fixture
def random_problem():
    rng = np.random.default_rng(7)
    w = rng.integers(1, 30, size=(15, 15)).astype(float)
    np.fill_diagonal(w, 0)
    return make(w)


def test_neighbour_lists_are_short_sorted_and_exclude_self(random_problem):
    p = random_problem
    for v in range(p.size):
        nn = p.neighbours(v)
        assert len(nn) == min(10, p.size - 1)
        assert v not in nn
        ws = [p.weight(v, u) for u in nn]
        assert ws == sorted(ws)
        assert nn.max == max(ws)
        # nothing left out is closer than the farthest admitted node
        rest = [p.weight(v, u) for u in range(p.size) if u != v and u not in nn]
        assert all(w >= nn.max for w in rest)


def test_small_problem_lists_every_other_node():
    p = make([[0, 3, 1, 2],
              [1, 0, 1, 1],
              [5, 4, 0, 6],
              [2, 2, 2, 0]])
    assert list(p.neighbours(0)) == [2, 3, 1]
    assert p.neighbours(0).max == 3
    assert list(p.neighbours(2)) == [1, 0, 3]


def test_ties_break_by_node_index():
    p = make([[0, 2, 1, 2, 1],
              [0, 0, 0, 0, 0],
              [0, 0, 0, 0, 0],
              [0, 0, 0, 0, 0],
              [0, 0, 0, 0, 0]])
    assert list(p.neighbours(0)) == [2, 4, 1, 3]
    assert list(p.neighbours(3)) == [0, 1, 2, 4]
    assert p.neighbours(3).max == 0


def test_equal_weight_group_is_cut_at_ten():
    n = 14
    w = np.full((n, n), 5.0)
    np.fill_diagonal(w, 0)
    w[0, 13] = 1.0
    p = make(w)
    assert list(p.neighbours(0)) == [13, 1, 2, 3, 4, 5, 6, 7, 8, 9]
    assert p.neighbours(0).max == 5.0


def test_neighbours_are_memoised(random_problem):
    first = random_problem.neighbours(3)
    assert random_problem.neighbours(3) is first


def test_single_node_has_no_neighbours():
    p = make([[0]])
    assert len(p.neighbours(0)) == 0
    assert p.neighbours(0).max == 0


def test_nearest_neighbours_sequence_behaviour():
    nn = NearestNeighbours([4, 2, 9], 7)
    assert nn[0] == 4
    assert list(nn) == [4, 2, 9]
    assert 2 in nn and 3 not in nn
    assert nn == NearestNeighbours([4, 2, 9], 7.0)
    assert nn != NearestNeighbours([4, 2, 9], 8)


def test_weights_are_read_only(random_problem):
    with pytest.raises(ValueError):
        random_problem.weights[0, 1] = 99


def test_problem_copies_its_input():
    w = np.array([[0.0, 1.0], [2.0, 0.0]])
    p = make(w)
    w[0, 1] = 50
    assert p.weight(0, 1) == 1


def test_shape_must_match_size():
    with pytest.raises(ValueError):
        TSPLIBProblem("bad", "", 3, np.zeros((2, 2)), WeightType.EXPLICIT, ProblemType.TSP)
    with pytest.raises(ValueError):
        TSPLIBProblem("bad", "", 2, np.zeros((2, 3)), WeightType.EXPLICIT, ProblemType.TSP)


def test_symmetric_is_a_label_only():
    p = make([[0, 1], [9, 0]], problem_type=ProblemType.TSP)
    assert p.symmetric
    assert p.weight(0, 1) != p.weight(1, 0)
    assert not make([[0, 1], [1, 0]]).symmetric


def test_fixed_first_and_last_and_best():
    p = make([[0, 1], [1, 0]])
    assert p.first == 0 and p.last == 0
    assert p.best is None
    p.best = 2
    assert p.best == 2


@pytest.mark.parametrize("v", [-1, 3])
def test_out_of_range_node_does_not_poison_the_cache(v):
    p = make([[0, 1, 2], [1, 0, 3], [2, 3, 0]])
    with pytest.raises(IndexError):
        p.neighbours(v)
    assert 2 not in p.neighbours(2)
    assert list(p.neighbours(2)) == [0, 1]
