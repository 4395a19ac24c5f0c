"""Pytest fixtures for dependency wheel tests."""

import pytest

from dependency_wheel.matrix import DependencyMatrix


@pytest.fixture
def main_ab() -> DependencyMatrix:
    """Main depends on A and B, A depends on B."""
    return DependencyMatrix(
        names=["Main", "A", "B"],
        weights=[
            [0, 1, 1],
            [0, 0, 1],
            [0, 0, 0],
        ],
    )


@pytest.fixture
def chain() -> DependencyMatrix:
    """Chain: R -> A -> B -> C."""
    return DependencyMatrix(
        names=["R", "A", "B", "C"],
        weights=[
            [0, 1, 0, 0],
            [0, 0, 1, 0],
            [0, 0, 0, 1],
            [0, 0, 0, 0],
        ],
    )


@pytest.fixture
def asymmetric() -> DependencyMatrix:
    """Mutual dependency with different weights in each direction."""
    return DependencyMatrix(
        names=["root", "x"],
        weights=[
            [0, 2],
            [3, 0],
        ],
    )


@pytest.fixture
def self_loop() -> DependencyMatrix:
    """Non-zero diagonal entries alongside one real edge."""
    return DependencyMatrix(
        names=["root", "x"],
        weights=[
            [5, 1],
            [0, 2],
        ],
    )


@pytest.fixture
def isolated() -> DependencyMatrix:
    """Node 2 has no edges at all."""
    return DependencyMatrix(
        names=["root", "a", "lonely"],
        weights=[
            [0, 1, 0],
            [1, 0, 0],
            [0, 0, 0],
        ],
    )


@pytest.fixture
def weighted() -> DependencyMatrix:
    """Root with three differently weighted edges: out to 1 and 2, in from 2."""
    return DependencyMatrix(
        names=["root", "a", "b"],
        weights=[
            [0, 1, 3],
            [0, 0, 0],
            [2, 0, 0],
        ],
    )
