"""Cell resampler for reducing negative event weights.

The CellResampler collects events and then resamples them one cell at
a time. Every call to 'resample' grows a single cell around the given
seed event (see `cellres.resampling.cell`) and redistributes the
weights within that cell, which preserves the sum of all weights.

A typical use looks like:

    resampler = CellResampler(Configuration(pt_weight=0.1))

    for event in events:
        resampler.push(event)

    resampler.resample_all(max_dist=50.)

    weights = []
    result = resampler.take_next_result()
    while result is not None:
        weights.append(result)
        result = resampler.take_next_result()

    # results come out in reverse order
    weights.reverse()

"""

from functools import partial
import logging
import operator
import sys

import numpy as np

from eliot import start_action, log_call

from cellres.configuration import Configuration
from cellres.store import EventStore
from cellres.seeds import SeedSelector, SeedStrategy
from cellres.resampling.cell import CellBuilder, PRIMARY_WEIGHT_IDX
from cellres.resampling.distances.momentum import ScaledPtDistance
from cellres.resampling.neighbours.search import NeighbourSearch, SEARCH_CLASSES
from cellres.resampling.redistribution import REDISTRIBUTOR_CLASSES
from cellres.resampling.resamplers.resampler import (
    Resampler,
    InvalidSeedIndexError,
)


def normalize_max_dist(max_dist):
    """Convert a maximal cell radius to a float, with `numpy.inf` for
    no limit.

    None, infinity and the largest float all mean no limit.

    """

    if max_dist is None:
        return np.inf

    max_dist = float(max_dist)

    # also rejects nan
    if not max_dist >= 0.0:
        raise ValueError("The maximal distance must be non-negative, not {}".format(max_dist))

    if max_dist >= sys.float_info.max:
        return np.inf

    return max_dist


class CellResampler(Resampler):
    """Resampler merging the weights of nearby events in cells.

    Parameters
    ----------
    configuration : Configuration or None
        The resampler options, the defaults if None.

    capacity : int or None
        Number of events to reserve space for.

    """

    def __init__(self, configuration=None, capacity=None):

        super().__init__(EventStore(capacity=capacity))

        if configuration is None:
            configuration = Configuration()

        self._configuration = configuration

        self._distance = ScaledPtDistance(pt_weight=configuration.pt_weight)
        self._redistributor = REDISTRIBUTOR_CLASSES[configuration.redistribution]()

        self._cell_records = []

    @property
    def configuration(self):
        return self._configuration

    @property
    def distance(self):
        return self._distance

    @property
    def cell_records(self):
        """Summaries of all cells made so far."""
        return list(self._cell_records)

    def _check_seed(self, seed_idx):

        try:
            seed_idx = operator.index(seed_idx)
        except TypeError:
            raise InvalidSeedIndexError("Seed index must be an integer, not {!r}".format(seed_idx)) \
                from None

        if seed_idx < 0 or seed_idx >= len(self._store):
            raise InvalidSeedIndexError("There is no event with index {}".format(seed_idx))

        if seed_idx >= self._store.len_remaining():
            raise InvalidSeedIndexError("Event {} was already retrieved".format(seed_idx))

        return seed_idx

    def _gen_search(self, max_dist):
        """Build a nearest neighbour search over all remaining events."""

        algo = self._configuration.neighbour_search

        with start_action(action_type="cellres:neighbour_search:build",
                          algorithm=algo.value,
                          n_events=self._store.len_remaining()):

            images = self._distance.momenta_images(self._store.momenta)

            search_kwargs = {}
            if algo is NeighbourSearch.TREE:
                search_kwargs['leaf_size'] = self._configuration.leaf_size

            search = SEARCH_CLASSES[algo](images, self._distance,
                                          max_dist=max_dist,
                                          **search_kwargs)

        return search

    @log_call(include_args=[],
              include_result=False)
    def resample(self, seed_idx, max_dist=None):
        """Grow a cell around a seed event and redistribute its weights.

        Parameters
        ----------
        seed_idx : int
            Index of the seed event in the order events were pushed.

        max_dist : float or None
            Maximal distance of a cell member to the seed, None for no
            limit.

        Returns
        -------
        cell : Cell
            The cell that was resampled.

        Raises
        ------
        InvalidStateError
            If there are no events that could be resampled.

        InvalidSeedIndexError
            If the seed does not exist or was already retrieved.

        """

        self._resample_init()

        max_dist = normalize_max_dist(max_dist)
        seed_idx = self._check_seed(seed_idx)

        builder = CellBuilder(self._store.weights,
                              partial(self._gen_search, max_dist),
                              max_dist=max_dist)

        cell = builder.build(seed_idx)

        self._redistributor.apply(cell, self._store)

        self._cell_records.append(cell.record())

        self._resample_cleanup()

        return cell

    @log_call(include_args=[],
              include_result=False)
    def resample_all(self, max_dist=None, strategy=SeedStrategy.NEXT):
        """Resample cells until no event with negative weight is left
        that has not yet been a seed.

        Parameters
        ----------
        max_dist : float or None
            Maximal distance of a cell member to its seed, None for no
            limit.

        strategy : SeedStrategy or str
            Order in which seeds are chosen.

        Returns
        -------
        cells : list of Cell

        """

        self._resample_init()

        max_dist = normalize_max_dist(max_dist)
        selector = SeedSelector(strategy)

        used_seeds = set()
        cells = []
        while True:

            primary_weights = self._store.weights[:, PRIMARY_WEIGHT_IDX]

            seed_idx = selector.next_seed(primary_weights, exclude=used_seeds)
            if seed_idx is None:
                break

            used_seeds.add(seed_idx)
            cells.append(self.resample(seed_idx, max_dist=max_dist))

        self._resample_cleanup()

        logging.info("Resampled {} cells".format(len(cells)))

        return cells
