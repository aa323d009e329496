"""Selection of seeds for resampling a whole sample.

Only events with a negative primary weight are eligible as seeds. The
strategy decides in which order they are used:

- NEXT : the event with the lowest index first
- MOST_NEGATIVE : the event with the most negative weight first
- LEAST_NEGATIVE : the event with the least negative weight first

Ties are always resolved in favour of the lower index.

"""

from enum import Enum
import logging

import numpy as np


class SeedStrategy(Enum):
    NEXT = 'next'
    MOST_NEGATIVE = 'most_negative'
    LEAST_NEGATIVE = 'least_negative'


class SeedSelector(object):
    """Picks the next seed according to a SeedStrategy.

    Parameters
    ----------
    strategy : SeedStrategy or str

    """

    def __init__(self, strategy=SeedStrategy.NEXT):

        try:
            self.strategy = SeedStrategy(strategy)
        except ValueError:
            valid = ", ".join(member.value for member in SeedStrategy)
            raise ValueError("Invalid seed strategy '{}', must be one of: {}".format(
                strategy, valid)) from None

    def next_seed(self, primary_weights, exclude=()):
        """Choose the next seed.

        Parameters
        ----------
        primary_weights : arraylike of float
            The primary weights of all events that can be seeds.

        exclude : collection of int
            Indices of events that must not be chosen, e.g. because
            they were already used as seeds.

        Returns
        -------
        seed_idx : int or None
            The index of the seed, None if there are no eligible events.

        """

        primary_weights = np.asarray(primary_weights, dtype=float)

        eligible = primary_weights < 0
        if len(exclude) > 0:
            eligible[list(exclude)] = False

        candidate_idxs = np.flatnonzero(eligible)
        if len(candidate_idxs) == 0:
            return None

        # argmin and argmax return the first, i.e. lowest, index of ties
        if self.strategy is SeedStrategy.NEXT:
            seed_idx = candidate_idxs[0]
        elif self.strategy is SeedStrategy.MOST_NEGATIVE:
            seed_idx = candidate_idxs[np.argmin(primary_weights[candidate_idxs])]
        else:
            seed_idx = candidate_idxs[np.argmax(primary_weights[candidate_idxs])]

        logging.debug("Selected seed {} with weight {}".format(
            seed_idx, primary_weights[seed_idx]))

        return int(seed_idx)
