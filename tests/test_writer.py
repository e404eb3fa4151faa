import io

import numpy as np

from tsplib_bench import (ProblemType, TSPLIBProblem, WeightType, dumps_tsplib, load_tsplib,
                          parse_tsplib, save_tsplib, write_tsplib)


def make(weights, problem_type=ProblemType.ATSP, name="w3", comment="c"):
    w = np.asarray(weights, dtype=float)
    return TSPLIBProblem(name, comment, w.shape[0], w, WeightType.EXPLICIT, problem_type)


def test_layout_and_padding():
    p = make([[0, 5, 120], [7, 0, 3], [15, 9, 0]])
    assert dumps_tsplib(p) == (
        "NAME: w3\n"
        "TYPE: ATSP\n"
        "COMMENT: c\n"
        "DIMENSION: 3\n"
        "EDGE_WEIGHT_TYPE: EXPLICIT\n"
        "EDGE_WEIGHT_FORMAT: FULL_MATRIX\n"
        "DISPLAY_DATA_TYPE: TWOD_DISPLAY\n"
        "EDGE_WEIGHT_SECTION\n"
        "  0   5 120\n"
        "  7   0   3\n"
        " 15   9   0\n"
        "EOF\n"
    )


def test_symmetric_problem_uses_the_same_full_matrix():
    p = make([[0, 2], [2, 0]], problem_type=ProblemType.TSP)
    text = dumps_tsplib(p)
    assert "TYPE: TSP\n" in text
    assert "EDGE_WEIGHT_FORMAT: FULL_MATRIX\n" in text
    assert "0 2\n2 0\n" in text


def test_weights_are_truncated():
    p = make([[0, 2.7], [9.99, 0]])
    assert "0 2\n9 0\n" in dumps_tsplib(p)


def test_integer_round_trip():
    rng = np.random.default_rng(3)
    w = rng.integers(0, 1000, size=(12, 12)).astype(float)
    np.fill_diagonal(w, 0)
    p = make(w, name="rt", comment="round trip")
    back = parse_tsplib(dumps_tsplib(p))
    assert np.array_equal(back.weights, p.weights)
    assert (back.name, back.comment, back.size, back.type) == ("rt", "round trip", 12, ProblemType.ATSP)


def test_fractional_round_trip_is_lossy():
    p = make([[0, 1.5], [2.25, 0]])
    back = parse_tsplib(dumps_tsplib(p))
    assert back.weights.tolist() == [[0, 1], [2, 0]]
    assert not np.array_equal(back.weights, p.weights)


def test_euclidean_problem_is_written_explicitly(problems_dir):
    p = load_tsplib(problems_dir / "rect6.tsp")
    back = parse_tsplib(dumps_tsplib(p))
    assert back.weight_type is WeightType.EXPLICIT
    assert back.symmetric
    assert np.array_equal(back.weights, p.weights)


def test_write_to_stream_and_file(tmp_path):
    p = make([[0, 1], [1, 0]])
    buf = io.StringIO()
    write_tsplib(p, buf)
    assert buf.getvalue().endswith("EOF\n")

    out = tmp_path / "sub" / "p.atsp"
    save_tsplib(p, out)
    assert out.read_text(encoding="utf-8") == buf.getvalue()
    assert load_tsplib(out).weights.tolist() == [[0, 1], [1, 0]]
