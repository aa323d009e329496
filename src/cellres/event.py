"""Reference implementation of a collision event.

An event is a container for:

- `weights` : a 1-dimensional array of floats. The first entry is the
  primary (central) weight and any further entries are variations of
  it, e.g. from scale or PDF variations.

- `momenta` : an ordered mapping from an integer particle type id to
  an array of shape (n_particles, 4) holding the 4-momenta
  (E, px, py, pz) of all particles of that type.

The resamplers do not care what the particle type ids mean as long as
different types of particles get different ids. The momenta of each
type are kept in the order they were given, which is the order used
to pair up particles when computing distances between events.

Events are compared only when they are structurally identical, which
is captured by the `EventShape` of an event.

"""

from collections import namedtuple

import numpy as np

EventShape = namedtuple('EventShape', ['type_counts', 'n_weights'])
"""The structure of an event.

`type_counts` is a tuple of (type_id, n_particles) pairs sorted by
type id and `n_weights` is the length of the weight vector.
"""

MOMENTUM_DIM = 4
"""Number of components of a momentum: energy and 3-momentum."""


def _momenta_array(type_id, momenta):
    """Convert the momenta of one particle type to a float array of shape
    (n_particles, 4)."""

    momenta = np.array(momenta, dtype=float)

    # an empty collection of momenta is allowed
    if momenta.size == 0:
        momenta = momenta.reshape((0, MOMENTUM_DIM))

    if momenta.ndim != 2 or momenta.shape[1] != MOMENTUM_DIM:
        raise ValueError("Momenta for particle type {} must have shape (n_particles, {}), "
                         "not {}".format(type_id, MOMENTUM_DIM, momenta.shape))

    if not np.all(np.isfinite(momenta)):
        raise ValueError("Momenta for particle type {} are not finite".format(type_id))

    return momenta


class Event(object):
    """Reference implementation of the Event interface.

    Parameters
    ----------
    weights : float or arraylike of float
        The event weights, the first one being the primary weight.

    type_sets : dict of int: arraylike or iterable of (int, arraylike)
        The particle type ids and the 4-momenta of the particles of that
        type. When the same type id is given more than once the momenta
        are appended in order.

    """

    def __init__(self, weights, type_sets):

        weights = np.array(weights, dtype=float).reshape(-1)

        if weights.size == 0:
            raise ValueError("An event needs at least one weight")

        if not np.all(np.isfinite(weights)):
            raise ValueError("Event weights must be finite, got {}".format(weights))

        if hasattr(type_sets, 'items'):
            type_sets = type_sets.items()

        grouped = {}
        for type_id, momenta in type_sets:
            type_id = int(type_id)
            momenta = _momenta_array(type_id, momenta)

            if type_id in grouped:
                grouped[type_id] = np.concatenate([grouped[type_id], momenta])
            else:
                grouped[type_id] = momenta

        self.weights = weights
        self.momenta = {type_id : grouped[type_id] for type_id in sorted(grouped)}

    @property
    def weight(self):
        """The primary weight of the event."""
        return self.weights[0]

    @property
    def n_weights(self):
        return len(self.weights)

    @property
    def n_particles(self):
        """Total number of particles of all types."""
        return sum(len(momenta) for momenta in self.momenta.values())

    @property
    def shape(self):
        """The `EventShape` of this event."""

        type_counts = tuple((type_id, len(momenta))
                            for type_id, momenta in self.momenta.items())

        return EventShape(type_counts=type_counts,
                          n_weights=self.n_weights)

    def flat_momenta(self):
        """All momenta in a single array of shape (n_particles, 4).

        Particles are ordered by type id and then by the order they
        were given in.

        """

        if len(self.momenta) == 0:
            return np.zeros((0, MOMENTUM_DIM))

        return np.concatenate(list(self.momenta.values()))

    def __repr__(self):
        return "Event(weights={}, shape={})".format(list(self.weights), self.shape.type_counts)
