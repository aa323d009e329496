"""Cells of nearby events and their construction.

A cell is a group of events close to a seed event whose summed primary
weight is non-negative, unless the growth of the cell was stopped by
the distance limit or by running out of events.

Cells are grown by adding the event nearest to the *seed* that has not
been added yet, one at a time:

1. the cell starts out as the seed alone
2. if the summed primary weight is non-negative the cell is complete
3. otherwise the nearest available event is looked up; if there is
   none or it is further from the seed than the maximal distance the
   growth stops
4. else the event is added and we continue at 2.

Since the nearest neighbour search is only needed when the seed has a
negative weight, it is constructed lazily from a factory.

"""

import numpy as np

from eliot import start_action

PRIMARY_WEIGHT_IDX = 0
"""Index of the weight that decides when a cell is complete."""


class Cell(object):
    """A seed event and its accepted neighbours.

    Parameters
    ----------
    seed_idx : int
        Index of the seed event.

    seed_weights : arraylike of float
        Weights of the seed event.

    """

    def __init__(self, seed_idx, seed_weights):

        self._seed_idx = int(seed_idx)
        self._members = [self._seed_idx]
        self._weight_sum = np.array(seed_weights, dtype=float)
        self._radius = 0.0

    @property
    def seed_idx(self):
        return self._seed_idx

    @property
    def members(self):
        """Indices of all events in the cell, in the order they were
        added."""
        return tuple(self._members)

    @property
    def n_members(self):
        return len(self._members)

    @property
    def weight_sum(self):
        """Sum of the weights of all members."""
        return self._weight_sum.copy()

    @property
    def radius(self):
        """Largest distance of a member to the seed."""
        return self._radius

    def is_complete(self):
        """Whether the summed primary weight is non-negative."""
        return self._weight_sum[PRIMARY_WEIGHT_IDX] >= 0

    def add(self, event_idx, weights, dist):
        """Add an event at distance 'dist' from the seed to the cell."""

        self._members.append(int(event_idx))
        self._weight_sum += weights
        self._radius = max(self._radius, dist)

    def record(self):
        """Summary of the cell as a dictionary."""

        return {
            'seed_idx' : self._seed_idx,
            'n_members' : self.n_members,
            'radius' : self._radius,
            'weight_sum' : self._weight_sum.tolist(),
        }

    def __repr__(self):
        return "Cell(seed_idx={}, members={}, radius={})".format(
            self._seed_idx, self._members, self._radius)


class CellBuilder(object):
    """Grows cells around seed events.

    Parameters
    ----------
    weights : arraylike of float of shape (n_events, n_weights)
        The weights of all events available for the cell.

    search_factory : callable
        Called without arguments to construct the NeighbourSearchAlgo
        over the images of the same events.

    max_dist : float
        Largest allowed distance between the seed and a member of the
        cell, `numpy.inf` for no limit.

    """

    def __init__(self, weights, search_factory, max_dist=np.inf):

        self._weights = weights
        self._search_factory = search_factory
        self._max_dist = max_dist

    def build(self, seed_idx):
        """Grow a cell around the seed.

        Parameters
        ----------
        seed_idx : int

        Returns
        -------
        cell : Cell

        """

        with start_action(action_type="cellres:cell:build",
                          seed_idx=int(seed_idx)) as action:

            cell = Cell(seed_idx, self._weights[seed_idx])

            search = None
            while not cell.is_complete():

                if search is None:
                    search = self._search_factory()
                    search.remove(seed_idx)
                    seed_image = search.image(seed_idx)

                neighbour = search.nearest(seed_image)
                if neighbour is None:
                    break

                neighbour_idx, dist = neighbour
                if dist > self._max_dist:
                    break

                cell.add(neighbour_idx, self._weights[neighbour_idx], dist)
                search.remove(neighbour_idx)

            action.add_success_fields(n_members=cell.n_members,
                                      radius=cell.radius,
                                      complete=bool(cell.is_complete()))

        return cell
