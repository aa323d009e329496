"""Rules for redistributing the weights within a cell.

A redistributor computes new weights for all members of a cell such
that the sum of every weight component over the cell stays the same.
Because only the members of the cell are touched, the sum over all
events is also preserved.

- MeanRedistributor : every member gets the mean weights of the cell,
  which equalizes the weights within the cell.

- AbsoluteWeightRedistributor : every member keeps the magnitude of
  its weights relative to the others but gets the sign of the cell
  sum, i.e. for each weight component j

  .. math::
      w'_{ij} = |w_{ij}| \\frac{\\sum_k w_{kj}}{\\sum_k |w_{kj}|}

"""

from enum import Enum

import numpy as np


class Redistribution(Enum):
    """Available weight redistribution rules."""

    MEAN = 'mean'
    ABSOLUTE = 'absolute'


class Redistributor(object):
    """Abstract base class for weight redistribution rules."""

    def redistribute(self, cell, member_weights):
        """Compute the new weights of the members of a cell.

        Parameters
        ----------
        cell : Cell

        member_weights : arraylike of float of shape (n_members, n_weights)
            The current weights of the members, in the order of
            'cell.members'.

        Returns
        -------
        new_weights : arraylike of float of shape (n_members, n_weights)

        """
        raise NotImplementedError

    def apply(self, cell, store):
        """Rewrite the weights of the cell members in the store.

        Parameters
        ----------
        cell : Cell

        store : EventStore

        """

        # a single event keeps its weights
        if cell.n_members < 2:
            return

        members = list(cell.members)

        new_weights = self.redistribute(cell, store.weights[members])

        store.set_weights(members, new_weights)


class MeanRedistributor(Redistributor):

    def redistribute(self, cell, member_weights):

        mean_weights = cell.weight_sum / cell.n_members

        return np.tile(mean_weights, (cell.n_members, 1))


class AbsoluteWeightRedistributor(Redistributor):

    def redistribute(self, cell, member_weights):

        member_weights = np.asarray(member_weights, dtype=float)

        abs_weights = np.abs(member_weights)
        abs_sum = abs_weights.sum(axis=0)

        new_weights = member_weights.copy()

        # components where all members have zero weight stay as they are
        nonzero = abs_sum > 0
        new_weights[:, nonzero] = abs_weights[:, nonzero] \
                                  * (cell.weight_sum[nonzero] / abs_sum[nonzero])

        return new_weights


REDISTRIBUTOR_CLASSES = {
    Redistribution.MEAN : MeanRedistributor,
    Redistribution.ABSOLUTE : AbsoluteWeightRedistributor,
}
"""Mapping of redistribution rules to their implementations."""
