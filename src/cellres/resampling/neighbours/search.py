"""Nearest neighbour searches over the images of events.

A neighbour search is built over the images of all events available
for one resampling. It answers queries for the nearest event that is
still available and supports removing events once they have been
used. Removal only marks the event, the underlying structure is never
rebuilt.

Two implementations with identical results are provided:

- NaiveNeighbourSearch : a linear scan over all available events
- TreeNeighbourSearch : a k-d tree query with soft deletion

Only events within the maximal distance given at construction are ever
returned. Among events at the same distance the one with the lowest
index is returned, so the choice of search algorithm never changes the
outcome of a resampling.

"""

from enum import Enum
import logging

import numpy as np
from scipy.spatial import cKDTree

from cellres.resampling.resamplers.resampler import ResamplerError


class NeighbourSearch(Enum):
    """Available nearest neighbour search algorithms."""

    TREE = 'tree'
    NAIVE = 'naive'


class NeighbourSearchAlgo(object):
    """Abstract base class for nearest neighbour searches.

    Parameters
    ----------
    images : arraylike of float of shape (n_events, image_dim)
        The images of all events that can be found.

    distance : object implementing Distance
        The distance used to compare the images.

    max_dist : float
        Events further away from the query than this are never
        returned. Use `numpy.inf` for no limit.

    """

    def __init__(self, images, distance, max_dist=np.inf):

        self._images = np.asarray(images, dtype=float)
        self._distance = distance
        self._max_dist = max_dist

        self._available = np.ones(len(self._images), dtype=bool)
        self._n_available = len(self._images)

    @property
    def max_dist(self):
        return self._max_dist

    def __len__(self):
        return len(self._images)

    @property
    def n_available(self):
        """Number of events that were not removed yet."""
        return self._n_available

    def image(self, event_idx):
        return self._images[event_idx]

    def is_available(self, event_idx):
        return bool(self._available[event_idx])

    def remove(self, event_idx):
        """Mark an event as used, it will not be returned by any further
        queries."""

        if not self._available[event_idx]:
            raise ResamplerError("Event {} was already removed".format(event_idx))

        self._available[event_idx] = False
        self._n_available -= 1

    def _closest(self, image, candidate_idxs):
        """Find the candidate closest to the image within the maximal
        distance.

        Parameters
        ----------
        image : arraylike of float

        candidate_idxs : arraylike of int

        Returns
        -------
        neighbour : tuple of (int, float) or None
            Index and distance of the closest candidate.

        """

        # sorting makes the first minimum the one with the lowest index
        candidate_idxs = np.sort(np.asarray(candidate_idxs, dtype=int))

        if len(candidate_idxs) == 0:
            return None

        dists = self._distance.image_distances(image, self._images[candidate_idxs])

        within = dists <= self._max_dist
        if not np.any(within):
            return None

        candidate_idxs = candidate_idxs[within]
        dists = dists[within]

        closest_pos = np.argmin(dists)

        return int(candidate_idxs[closest_pos]), float(dists[closest_pos])

    def nearest(self, image):
        """Find the nearest available event.

        Parameters
        ----------
        image : arraylike of float
            The image to find the nearest neighbour of.

        Returns
        -------
        neighbour : tuple of (int, float) or None
            Index of and distance to the nearest available event within
            the maximal distance, None if there is none.

        """
        raise NotImplementedError


class NaiveNeighbourSearch(NeighbourSearchAlgo):
    """Nearest neighbour search by comparing to all available events."""

    def nearest(self, image):

        if self._n_available == 0:
            return None

        return self._closest(image, np.flatnonzero(self._available))


class TreeNeighbourSearch(NeighbourSearchAlgo):
    """Nearest neighbour search using a k-d tree.

    The tree is queried for the k nearest events, doubling k until an
    available event is found that is provably closer than any event
    not yet returned by the tree. The distances reported by the tree
    are only used to decide when to stop, the returned distance is
    always recomputed with the distance object so that results agree
    exactly with the naive search.

    Parameters
    ----------
    leaf_size : int
        Leaf size of the k-d tree.

    """

    DEFAULT_LEAF_SIZE = 16

    INITIAL_K = 8
    """Number of neighbours requested in the first query."""

    REL_TOL = 1e-9
    """Relative tolerance between tree and recomputed distances."""

    def __init__(self, images, distance, max_dist=np.inf, leaf_size=None):

        super().__init__(images, distance, max_dist=max_dist)

        if leaf_size is None:
            leaf_size = self.DEFAULT_LEAF_SIZE

        # a k-d tree needs at least one dimension
        tree_data = self._images
        if tree_data.ndim != 2 or tree_data.shape[1] == 0:
            tree_data = np.zeros((len(self._images), 1))

        self._tree = cKDTree(tree_data, leafsize=leaf_size)

        if np.isinf(max_dist):
            self._query_bound = np.inf
        else:
            self._query_bound = max_dist * (1 + self.REL_TOL) + self.REL_TOL

        # number of neighbours that was enough for the last query
        self._k = min(self.INITIAL_K, len(self._images))

        logging.debug("Built k-d tree over {} events".format(len(self._images)))

    def _tree_point(self, image):

        image = np.asarray(image, dtype=float)
        if image.size == 0:
            return np.zeros(1)

        return image

    def nearest(self, image):

        n_events = len(self._images)

        if self._n_available == 0:
            return None

        point = self._tree_point(image)

        k = max(self._k, 1)
        while True:

            tree_dists, tree_idxs = self._tree.query(point, k=k,
                                                     distance_upper_bound=self._query_bound)

            tree_dists = np.atleast_1d(tree_dists)
            tree_idxs = np.atleast_1d(tree_idxs)

            # missing neighbours are reported with infinite distance
            found = np.isfinite(tree_dists)

            # every event within the query bound has been seen
            complete = k >= n_events or not found[-1]

            candidate_idxs = tree_idxs[found]
            candidate_idxs = candidate_idxs[self._available[candidate_idxs]]

            closest = self._closest(image, candidate_idxs)

            if complete:
                self._k = k
                return closest

            # events not returned yet are at least as far as the last one
            # that was
            if closest is not None and closest[1] * (1 + self.REL_TOL) < tree_dists[-1]:
                self._k = k
                return closest

            k = min(2 * k, n_events)


SEARCH_CLASSES = {
    NeighbourSearch.TREE : TreeNeighbourSearch,
    NeighbourSearch.NAIVE : NaiveNeighbourSearch,
}
"""Mapping of the search algorithms to their implementations."""
