"""Shared layered-graph fixtures."""

import pytest


@pytest.fixture
def two_layers():
    # Stage:   0        1        2
    #
    #              [1]      [2]
    #          0 ──────► 0 ──────► 0
    #          │                   ▲
    #          │  [4]         [1]  │
    #          └───────► 1 ────────┘
    return [
        [(0, 0, 1.0), (0, 1, 4.0)],
        [(0, 0, 2.0), (1, 0, 1.0)],
    ]


@pytest.fixture
def tied_routes():
    # Two disjoint routes of total weight 3 end at different vertices:
    #   0 -[2]-> 0 -[1]-> 0
    #   0 -[1]-> 1 -[2]-> 1
    return [
        [(0, 0, 2.0), (0, 1, 1.0)],
        [(0, 0, 1.0), (1, 1, 2.0)],
    ]


@pytest.fixture
def negative_weights():
    #   0 -[-1]-> 0 -[3]-> 0   total 2
    #   0 -[2]->  1 -[-5]-> 0  total -3
    return [
        [(0, 0, -1.0), (0, 1, 2.0)],
        [(0, 0, 3.0), (1, 0, -5.0)],
    ]


@pytest.fixture
def three_stage_fan():
    # Three origins fan into two vertices, then into a single sink.
    return [
        [(0, 0, 4.0), (1, 0, 2.5), (2, 1, 1.0), (1, 1, 3.0)],
        [(0, 0, 1.0), (1, 0, 2.0)],
        [(0, 0, 0.5)],
    ]
