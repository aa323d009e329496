"""Storage for the events that are being resampled.

The EventStore keeps the weights and momenta of all events in two
preallocated numpy arrays which grow geometrically when they are full:

- weights : shape (capacity, n_weights)
- momenta : shape (capacity, n_particles, 4)

The shape of the arrays is fixed by the first event pushed. All
following events must have the same EventShape.

Results are retrieved from the *end* of the store, so that events are
never shifted around. Retrieved events stay in the arrays but are not
visible through the 'weights' and 'momenta' views anymore.

"""

import logging

import numpy as np

from cellres.event import MOMENTUM_DIM
from cellres.resampling.resamplers.resampler import (
    ResamplerError,
    AllocationError,
    ShapeMismatchError,
)


class EventStore(object):
    """Append-only store of events with a LIFO drain of the results.

    Parameters
    ----------
    capacity : int or None
        Number of events to reserve space for.

    """

    MIN_CAPACITY = 8
    """Smallest number of events to allocate space for."""

    def __init__(self, capacity=None):

        self._shape = None

        self._weights = None
        self._momenta = None

        self._n_events = 0
        self._n_taken = 0

        # requested capacity before the shape is known
        self._capacity_hint = 0

        if capacity is not None:
            self.reserve(capacity)

    @property
    def shape(self):
        """The EventShape of all events, None before the first push."""
        return self._shape

    @property
    def capacity(self):
        if self._weights is None:
            return self._capacity_hint
        return len(self._weights)

    def __len__(self):
        """Total number of events pushed, including the retrieved ones."""
        return self._n_events

    def len_remaining(self):
        """Number of events not yet retrieved."""
        return self._n_events - self._n_taken

    @property
    def n_taken(self):
        return self._n_taken

    @property
    def n_particles(self):
        return sum(n for _, n in self._shape.type_counts)

    def _allocate(self, capacity, n_weights, n_particles):

        try:
            weights = np.empty((capacity, n_weights))
            momenta = np.empty((capacity, n_particles, MOMENTUM_DIM))
        except (MemoryError, ValueError) as err:
            raise AllocationError("Could not allocate space for {} events".format(capacity)) \
                from err

        return weights, momenta

    def _grow(self, capacity):
        """Make the arrays hold at least 'capacity' events."""

        if capacity <= len(self._weights):
            return

        new_capacity = max(capacity, 2 * len(self._weights))

        logging.debug("Growing the event store from {} to {} events".format(
            len(self._weights), new_capacity))

        weights, momenta = self._allocate(new_capacity,
                                          self._shape.n_weights,
                                          self.n_particles)

        weights[:self._n_events] = self._weights[:self._n_events]
        momenta[:self._n_events] = self._momenta[:self._n_events]

        self._weights = weights
        self._momenta = momenta

    def reserve(self, capacity):
        """Reserve space for 'capacity' more events.

        This is only a hint. If the space cannot be allocated the store
        keeps its current capacity and grows as usual when pushing.

        Parameters
        ----------
        capacity : int

        """

        capacity = int(capacity)
        if capacity < 0:
            raise ValueError("Capacity must be non-negative, not {}".format(capacity))

        if self._weights is None:
            self._capacity_hint = max(self._capacity_hint, capacity)
            return

        try:
            self._grow(self._n_events + capacity)
        except AllocationError as err:
            logging.debug("Ignoring capacity hint of {} events: {}".format(capacity, err))

    def _allocate_first(self, shape):
        """Allocate the arrays for the first event, honouring the capacity
        hint if possible."""

        n_particles = sum(n for _, n in shape.type_counts)
        capacity = max(self._capacity_hint, self.MIN_CAPACITY)

        # the hint is used up whether or not it can be satisfied
        self._capacity_hint = 0

        try:
            return self._allocate(capacity, shape.n_weights, n_particles)
        except AllocationError as err:
            if capacity == self.MIN_CAPACITY:
                raise

            logging.debug("Ignoring capacity hint of {} events: {}".format(capacity, err))

        return self._allocate(self.MIN_CAPACITY, shape.n_weights, n_particles)

    def push(self, event):
        """Append an event.

        Parameters
        ----------
        event : Event

        Raises
        ------
        ShapeMismatchError
            If the event does not have the shape of the previous ones.

        AllocationError
            If the store is full and cannot grow.

        """

        shape = event.shape

        if self._shape is None:
            self._weights, self._momenta = self._allocate_first(shape)
            self._shape = shape

            logging.debug("Event shape set to {}".format(shape))

        elif shape != self._shape:
            raise ShapeMismatchError("Event with shape {} does not match the shape {} "
                                     "of the stored events".format(shape, self._shape))

        else:
            self._grow(self._n_events + 1)

        self._weights[self._n_events] = event.weights
        self._momenta[self._n_events] = event.flat_momenta()

        self._n_events += 1

    def take_next_result(self):
        """Remove the last remaining event and return a copy of its
        weights, None if there are no events left."""

        n_remaining = self.len_remaining()
        if n_remaining == 0:
            return None

        weights = self._weights[n_remaining - 1].copy()
        self._n_taken += 1

        return weights

    @property
    def weights(self):
        """View of the weights of the remaining events, shape
        (n_remaining, n_weights)."""

        if self._weights is None:
            return np.zeros((0, 0))

        return self._weights[:self.len_remaining()]

    @property
    def momenta(self):
        """View of the momenta of the remaining events, shape
        (n_remaining, n_particles, 4)."""

        if self._momenta is None:
            return np.zeros((0, 0, MOMENTUM_DIM))

        return self._momenta[:self.len_remaining()]

    def set_weights(self, event_idxs, weights):
        """Overwrite the weights of some of the remaining events.

        Parameters
        ----------
        event_idxs : list of int

        weights : arraylike of shape (len(event_idxs), n_weights)

        """

        event_idxs = np.asarray(event_idxs, dtype=int)

        if np.any(event_idxs < 0) or np.any(event_idxs >= self.len_remaining()):
            raise ResamplerError("Can only set the weights of remaining events, "
                                 "got indices {}".format(event_idxs))

        self._weights[event_idxs] = weights

    def weight_sums(self):
        """Sum of each weight component over all events, retrieved or not."""

        if self._weights is None:
            return np.zeros(0)

        return self._weights[:self._n_events].sum(axis=0)
