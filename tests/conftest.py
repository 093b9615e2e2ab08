#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
from dataclasses import dataclass

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass
class Point:
    x: int
    y: int


class BrokenSequence(abc.Sequence):
    """Sequence whose __len__ fails."""

    def __len__(self):
        raise RuntimeError("len exploded")

    def __getitem__(self, index):
        raise IndexError(index)


class BrokenMapping(abc.Mapping):
    """Mapping whose iteration fails."""

    def __getitem__(self, key):
        raise KeyError(key)

    def __iter__(self):
        raise RuntimeError("iter exploded")

    def __len__(self):
        return 1


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def point() -> Point:
    return Point(x=1, y=2)


@pytest.fixture
def broken_sequence() -> BrokenSequence:
    return BrokenSequence()


@pytest.fixture
def broken_mapping() -> BrokenMapping:
    return BrokenMapping()


@pytest.fixture
def deep_list():
    """A list nested far beyond the interpreter recursion limit."""

    def _create(depth: int = 5000) -> list:
        root = node = []
        for _ in range(depth):
            child = []
            node.append(child)
            node = child
        return root

    return _create
