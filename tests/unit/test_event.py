# Third Party Library
import numpy as np
import pytest

# First Party Library
from cellres.event import Event, EventShape


class TestEvent:
    def test_scalar_weight(self):
        event = Event(-1.5, {90 : [[10.0, 0.0, 0.0, 10.0]]})

        assert event.n_weights == 1
        assert event.weight == -1.5
        assert event.weights.shape == (1,)

    def test_shape(self):
        event = Event([1.0, 0.9, 1.1],
                      {11 : [[1.0, 0.0, 0.0, 1.0]],
                       -11 : [[1.0, 0.0, 0.0, -1.0]],
                       90 : [[5.0, 3.0, 4.0, 0.0], [5.0, -3.0, -4.0, 0.0]]})

        assert event.shape == EventShape(type_counts=((-11, 1), (11, 1), (90, 2)),
                                         n_weights=3)
        assert event.n_particles == 4

    def test_type_order_does_not_matter(self):
        momenta_a = [[1.0, 0.0, 0.0, 1.0]]
        momenta_b = [[2.0, 0.0, 0.0, 2.0]]

        event_1 = Event(1.0, [(1, momenta_a), (2, momenta_b)])
        event_2 = Event(1.0, [(2, momenta_b), (1, momenta_a)])

        assert event_1.shape == event_2.shape
        assert np.array_equal(event_1.flat_momenta(), event_2.flat_momenta())

    def test_repeated_type_is_appended(self):
        event = Event(1.0, [(90, [[1.0, 1.0, 0.0, 0.0]]),
                            (90, [[2.0, 2.0, 0.0, 0.0]])])

        assert event.shape.type_counts == ((90, 2),)
        assert np.array_equal(event.momenta[90][:, 1], [1.0, 2.0])

    def test_flat_momenta_order(self):
        event = Event(1.0, {2 : [[2.0, 2.0, 0.0, 0.0]],
                            1 : [[1.0, 1.0, 0.0, 0.0], [3.0, 3.0, 0.0, 0.0]]})

        assert np.array_equal(event.flat_momenta()[:, 0], [1.0, 3.0, 2.0])

    def test_no_particles(self):
        event = Event(1.0, {})

        assert event.n_particles == 0
        assert event.flat_momenta().shape == (0, 4)

    def test_weights_are_copied(self):
        weights = np.array([1.0, 2.0])
        event = Event(weights, {})

        weights[0] = 5.0

        assert event.weight == 1.0

    @pytest.mark.parametrize("weights", [[], [np.nan], [1.0, np.inf]])
    def test_bad_weights(self, weights):
        with pytest.raises(ValueError):
            Event(weights, {90 : [[1.0, 0.0, 0.0, 1.0]]})

    @pytest.mark.parametrize("momenta", [
        [1.0, 0.0, 0.0, 1.0],
        [[1.0, 0.0, 0.0]],
        [[1.0, 0.0, np.nan, 1.0]],
    ])
    def test_bad_momenta(self, momenta):
        with pytest.raises(ValueError):
            Event(1.0, {90 : momenta})
