# Standard Library
from functools import partial

# Third Party Library
import numpy as np
import pytest

# First Party Library
from cellres.resampling.cell import Cell, CellBuilder
from cellres.resampling.distances.momentum import ScaledPtDistance
from cellres.resampling.neighbours.search import (
    NaiveNeighbourSearch,
    TreeNeighbourSearch,
)


def builder(xs, weights, search_class=NaiveNeighbourSearch, max_dist=np.inf):
    images = np.array([[x] for x in xs], dtype=float)
    weights = np.array(weights, dtype=float).reshape((len(xs), -1))

    factory = partial(search_class, images, ScaledPtDistance(), max_dist=max_dist)

    return CellBuilder(weights, factory, max_dist=max_dist)


class TestCell:
    def test_singleton(self):
        cell = Cell(3, [-1.0, -2.0])

        assert cell.members == (3,)
        assert cell.n_members == 1
        assert cell.radius == 0.0
        assert not cell.is_complete()

    def test_add(self):
        cell = Cell(0, [-1.0, -2.0])
        cell.add(4, np.array([0.5, 1.0]), 2.0)
        cell.add(2, np.array([0.5, 1.5]), 1.0)

        assert cell.members == (0, 4, 2)
        assert np.array_equal(cell.weight_sum, [0.0, 0.5])
        assert cell.radius == 2.0
        assert cell.is_complete()

    def test_seed_weights_not_modified(self):
        seed_weights = np.array([-1.0])
        cell = Cell(0, seed_weights)
        cell.add(1, np.array([2.0]), 1.0)

        assert seed_weights[0] == -1.0

    def test_record(self):
        cell = Cell(1, [-1.0])
        cell.add(0, np.array([3.0]), 0.5)

        assert cell.record() == {
            'seed_idx' : 1,
            'n_members' : 2,
            'radius' : 0.5,
            'weight_sum' : [2.0],
        }


@pytest.mark.parametrize("search_class", [NaiveNeighbourSearch, TreeNeighbourSearch])
class TestCellBuilder:
    def test_grows_until_non_negative(self, search_class):
        cell = builder([0.0, 1.0, 2.0, 3.0], [-2.0, 1.0, 1.0, 1.0],
                       search_class=search_class).build(0)

        assert cell.members == (0, 1, 2)
        assert cell.weight_sum[0] == 0.0
        assert cell.radius == 2.0

    def test_grows_around_seed(self, search_class):
        # the second member is closer to the first one than to the
        # seed, but the seed is the reference
        cell = builder([0.0, 1.0, 2.5, -2.0], [-3.0, 1.0, 1.0, 1.0],
                       search_class=search_class).build(0)

        assert cell.members == (0, 1, 3, 2)

    def test_max_dist(self, search_class):
        cell = builder([0.0, 1.0, 2.0, 10.0], [-3.0, 1.0, 1.0, 5.0],
                       search_class=search_class, max_dist=5.0).build(0)

        assert cell.members == (0, 1, 2)
        assert cell.weight_sum[0] == -1.0
        assert not cell.is_complete()

    def test_runs_out_of_events(self, search_class):
        cell = builder([0.0, 1.0], [-3.0, 1.0], search_class=search_class).build(0)

        assert cell.members == (0, 1)
        assert cell.weight_sum[0] == -2.0

    def test_ties(self, search_class):
        cell = builder([0.0, -1.0, 1.0], [-1.0, 1.0, 1.0],
                       search_class=search_class).build(0)

        assert cell.members == (0, 1)

    def test_only_primary_weight_decides(self, search_class):
        cell = builder([0.0, 1.0, 2.0], [[-1.0, -5.0], [1.0, 1.0], [1.0, 1.0]],
                       search_class=search_class).build(0)

        assert cell.members == (0, 1)
        assert np.array_equal(cell.weight_sum, [0.0, -4.0])


class TestLazySearch:
    def test_non_negative_seed_builds_no_search(self, mocker):
        factory = mocker.Mock()

        cell = CellBuilder(np.array([[1.0], [-1.0]]), factory).build(0)

        assert cell.members == (0,)
        factory.assert_not_called()

    def test_negative_seed_builds_search_once(self, mocker):
        images = np.array([[0.0], [1.0], [2.0]])
        factory = mocker.Mock(
            side_effect=lambda: NaiveNeighbourSearch(images, ScaledPtDistance()))

        CellBuilder(np.array([[-2.0], [1.0], [1.0]]), factory).build(0)

        assert factory.call_count == 1
