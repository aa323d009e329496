"""Root level conftest.

This provides fixtures for building small event samples that are
available to all tests.

"""

# Third Party Library
import numpy as np
import pytest

# First Party Library
from cellres.event import Event
from cellres.toys import dijet_events

LINE_TYPE_ID = 1


def line_event(x, weights):
    """An event with a single massless particle moving along the x-axis.

    With a pt weight of zero the distance between two such events is
    just the difference of their x positions.

    """

    return Event(weights, {LINE_TYPE_ID : [[abs(x), x, 0.0, 0.0]]})


def line_events(xs, weights):
    return [line_event(x, weight) for x, weight in zip(xs, weights)]


@pytest.fixture
def dijets():
    return dijet_events()


@pytest.fixture
def make_line_events():
    return line_events


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
