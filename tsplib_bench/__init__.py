# tsplib_bench package initializer
from .convert import convert_to_symmetric, symmetric_offset, to_symmetric
from .errors import MalformedInstance
from .problem import (NearestNeighbours, Point, Problem, ProblemType,
                      TSPLIBProblem, WeightType)
from .tsplib import load_tsplib, parse_tsplib
from .writer import dumps_tsplib, save_tsplib, write_tsplib

__all__ = [
    "MalformedInstance",
    "NearestNeighbours",
    "Point",
    "Problem",
    "ProblemType",
    "TSPLIBProblem",
    "WeightType",
    "convert_to_symmetric",
    "dumps_tsplib",
    "load_tsplib",
    "parse_tsplib",
    "save_tsplib",
    "symmetric_offset",
    "to_symmetric",
    "write_tsplib",
]
