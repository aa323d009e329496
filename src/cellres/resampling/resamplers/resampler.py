"""Abstract base class and errors for resamplers acting on a store of
events.

A resampler owns an event store, which it fills through 'push' and
drains through 'take_next_result'. In between, any number of calls to
'resample' rewrite the weights of the stored events in place.

The resampler follows a simple life cycle, reported by the 'state'
property:

- EMPTY : nothing has been pushed yet
- COLLECTING : events are being pushed
- RESAMPLED : at least one resampling was done, no more pushes allowed
- DRAINING : results are being retrieved
- EXHAUSTED : all results were retrieved
- CLOSED : the resampler was closed and has released its events

Subclasses must implement the 'resample' method and should call
'_resample_init' at its start and '_resample_cleanup' at its end.

"""

from enum import Enum
import logging

from eliot import log_call


class ResamplerError(Exception):
    """Error raised when some constraint on resampling properties is
    violated."""
    pass

class AllocationError(ResamplerError):
    """Storage for the events could not be allocated."""
    pass

class ShapeMismatchError(ResamplerError):
    """The structure of an event does not match the events already in
    the store."""
    pass

class InvalidSeedIndexError(ResamplerError):
    """The seed index does not refer to an event that is still available
    for resampling."""
    pass

class InvalidStateError(ResamplerError):
    """The operation is not allowed in the current state of the
    resampler."""
    pass


class ResamplerState(Enum):
    EMPTY = 0
    COLLECTING = 1
    RESAMPLED = 2
    DRAINING = 3
    EXHAUSTED = 4
    CLOSED = 5


PUSH_STATES = (ResamplerState.EMPTY, ResamplerState.COLLECTING,)
"""States in which events may be pushed."""

RESAMPLE_STATES = (ResamplerState.COLLECTING,
                   ResamplerState.RESAMPLED,
                   ResamplerState.DRAINING,)
"""States in which resampling is possible."""


class Resampler():
    """Abstract base class for implementing resamplers.

    Handles the life cycle of the event store. All subclasses of
    Resampler must implement the 'resample' method.

    Parameters
    ----------
    store : object implementing the EventStore interface
        The store that will own the events.

    """

    def __init__(self, store):

        self._store = store

        self._resampled = False
        self._closed = False

    @property
    def store(self):
        """The event store of this resampler."""
        self._check_open()
        return self._store

    @property
    def state(self):
        """The current ResamplerState."""

        if self._closed:
            return ResamplerState.CLOSED

        n_events = len(self._store)
        n_remaining = self._store.len_remaining()

        if n_events == 0:
            return ResamplerState.EMPTY
        elif n_remaining == 0:
            return ResamplerState.EXHAUSTED
        elif n_remaining < n_events:
            return ResamplerState.DRAINING
        elif self._resampled:
            return ResamplerState.RESAMPLED
        else:
            return ResamplerState.COLLECTING

    def _check_open(self):
        if self._closed:
            raise InvalidStateError("The resampler has been closed")

    def reserve(self, capacity):
        """Reserve space for 'capacity' more events.

        This is only a hint for performance and has no effect on the
        results.

        Parameters
        ----------
        capacity : int

        """

        self._check_open()
        self._store.reserve(capacity)

    def push(self, event):
        """Add an event to the end of the store.

        Parameters
        ----------
        event : Event

        Raises
        ------
        InvalidStateError
            If resampling or retrieval has already started.

        ShapeMismatchError
            If the structure of the event differs from the first event
            pushed.

        """

        state = self.state
        if state not in PUSH_STATES:
            raise InvalidStateError("Cannot add events in state {}".format(state.name))

        self._store.push(event)

    def take_next_result(self):
        """Retrieve the weights of the last event not yet retrieved.

        Results come in the *reverse* order the events were pushed in.

        Returns
        -------
        weights : arraylike of float or None
            The final weights of the event or None if all events were
            already retrieved.

        """

        self._check_open()

        weights = self._store.take_next_result()

        if weights is not None and self._store.len_remaining() == 0:
            logging.debug("All {} results were retrieved".format(len(self._store)))

        return weights

    def len_remaining(self):
        """Number of events that were not yet retrieved."""
        self._check_open()
        return self._store.len_remaining()

    def __len__(self):
        return self.len_remaining()

    def close(self):
        """Release the event store, including all events not yet
        retrieved."""

        if not self._closed:
            logging.debug("Closing resampler with {} unretrieved events".format(
                self._store.len_remaining()))

            self._store = None
            self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        self.close()

    def _resample_init(self):
        """Common initialization for resamplers.

        Checks that a resampling is possible in the current state.

        """

        state = self.state
        if state not in RESAMPLE_STATES:
            raise InvalidStateError("Cannot resample in state {}".format(state.name))

    def _resample_cleanup(self):
        """Common cleanup for resamplers.

        Marks the resampler as resampled so that no new events can be
        added.

        """

        if not self._resampled:
            logging.debug("First resampling done, no more events can be added")

        self._resampled = True

    @log_call(include_args=[],
              include_result=False)
    def resample(self, seed_idx, max_dist=None):
        """Perform a resampling of the stored events.

        Parameters
        ----------
        seed_idx : int
            Index of the event anchoring the resampling.

        max_dist : float or None
            The maximal distance of events to the seed, None for no
            limit.

        """

        raise NotImplementedError
