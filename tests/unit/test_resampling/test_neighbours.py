# Third Party Library
import numpy as np
import pytest

# First Party Library
from cellres.resampling.distances.momentum import ScaledPtDistance
from cellres.resampling.neighbours.search import (
    NaiveNeighbourSearch,
    TreeNeighbourSearch,
)
from cellres.resampling.resamplers.resampler import ResamplerError

SEARCH_CLASSES = [NaiveNeighbourSearch, TreeNeighbourSearch]


def nearest_sequence(search, query_idx):
    """Repeatedly take the nearest neighbour of one event until there are
    none left."""

    search.remove(query_idx)
    query = search.image(query_idx)

    sequence = []
    neighbour = search.nearest(query)
    while neighbour is not None:
        sequence.append(neighbour)
        search.remove(neighbour[0])
        neighbour = search.nearest(query)

    return sequence


def line_images(xs):
    return np.array([[x] for x in xs], dtype=float)


@pytest.mark.parametrize("search_class", SEARCH_CLASSES)
class TestNeighbourSearch:
    def test_order(self, search_class):
        search = search_class(line_images([0.0, 5.0, -1.0, 2.0]), ScaledPtDistance())

        sequence = nearest_sequence(search, 0)

        assert sequence == [(2, 1.0), (3, 2.0), (1, 5.0)]
        assert search.n_available == 0

    def test_max_dist(self, search_class):
        search = search_class(line_images([0.0, 5.0, -1.0, 2.0]), ScaledPtDistance(),
                              max_dist=2.0)

        sequence = nearest_sequence(search, 0)

        assert sequence == [(2, 1.0), (3, 2.0)]
        assert search.n_available == 1
        assert search.is_available(1)

    def test_ties_lowest_index(self, search_class):
        search = search_class(line_images([0.0, 1.0, -1.0, 1.0, -1.0]), ScaledPtDistance())

        assert [idx for idx, _ in nearest_sequence(search, 0)] == [1, 2, 3, 4]

    def test_many_identical(self, search_class):
        search = search_class(np.zeros((40, 3)), ScaledPtDistance())

        assert [idx for idx, _ in nearest_sequence(search, 17)] == \
            [idx for idx in range(40) if idx != 17]

    def test_no_dimensions(self, search_class):
        search = search_class(np.zeros((3, 0)), ScaledPtDistance())

        assert nearest_sequence(search, 1) == [(0, 0.0), (2, 0.0)]

    def test_single_event(self, search_class):
        search = search_class(line_images([3.0]), ScaledPtDistance())

        assert nearest_sequence(search, 0) == []

    def test_double_remove(self, search_class):
        search = search_class(line_images([0.0, 1.0]), ScaledPtDistance())
        search.remove(1)

        with pytest.raises(ResamplerError):
            search.remove(1)


class TestTreeAgreesWithNaive:
    @pytest.mark.parametrize("max_dist", [np.inf, 1.5, 0.0])
    def test_random_images(self, rng, max_dist):
        distance = ScaledPtDistance(pt_weight=0.5)
        images = distance.momenta_images(rng.normal(size=(300, 2, 4)))

        naive = NaiveNeighbourSearch(images, distance, max_dist=max_dist)
        tree = TreeNeighbourSearch(images, distance, max_dist=max_dist, leaf_size=4)

        assert nearest_sequence(naive, 42) == nearest_sequence(tree, 42)

    def test_clustered_images(self, rng):
        distance = ScaledPtDistance()

        # few distinct points with many duplicates produce lots of ties
        points = rng.integers(0, 3, size=(200, 2)).astype(float)

        naive = NaiveNeighbourSearch(points, distance)
        tree = TreeNeighbourSearch(points, distance)

        assert nearest_sequence(naive, 0) == nearest_sequence(tree, 0)


class TestTreeNeighbourSearch:
    def test_query_size_is_kept(self, mocker):
        n_events = 100
        n_queries = 50

        search = TreeNeighbourSearch(line_images(range(n_events)), ScaledPtDistance())
        search._tree = mocker.Mock(wraps=search._tree)

        search.remove(0)
        query = search.image(0)

        for idx in range(1, n_queries + 1):
            assert search.nearest(query) == (idx, float(idx))
            search.remove(idx)

        # the number of neighbours requested only doubles a few times
        # instead of growing anew for every query
        assert search._tree.query.call_count <= n_queries + 4
