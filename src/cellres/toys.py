"""Toy event samples for trying out and profiling the resamplers.

- `dijet_events` returns the two dijet events of the classic example:
  one with weight -1 and one with weight +1. Resampling with the first
  as seed and no distance limit leaves both with weight 0.

- `gen_toy_events` generates a random sample of massless particles of
  a single type with a given fraction of negative weights. Each event
  carries two weights, a central one and a variation of it.

"""

import numpy as np

from cellres.event import Event

JET_TYPE_ID = 90
"""Particle type id used for jets."""

DIJET_MOMENTA = (
    ((8.6042412975e+01, 1.8299527188e+01, 5.0776693328e+01, -6.7008593105e+01),
     (8.0026513931e+02, -1.8299527188e+01, -5.0776693328e+01, -7.9844295220e+02),),
    ((4.9452408437e+01, 2.0789583719e+01, -2.3718791628e+01, 3.8088749425e+01),
     (1.0452662667e+02, -2.0789583719e+01, 2.3718791628e+01, 9.9654542370e+01),),
)

DIJET_WEIGHTS = (-1.0, 1.0)


def dijet_events():
    """The two events of the dijet example.

    Returns
    -------
    events : list of Event

    """

    return [Event(weight, {JET_TYPE_ID : momenta})
            for weight, momenta in zip(DIJET_WEIGHTS, DIJET_MOMENTA)]


def gen_toy_events(n_events, n_particles=2, neg_frac=0.2,
                   pt_scale=50.0, pz_scale=200.0,
                   seed=None):
    """Generate a random sample of events.

    Parameters
    ----------
    n_events : int

    n_particles : int
        Number of particles in each event.

    neg_frac : float
        Probability of an event to have a negative weight.

    pt_scale : float
        Width of the normal distributions of the transverse momentum
        components.

    pz_scale : float
        Width of the normal distribution of the longitudinal momentum.

    seed : int or None
        Seed for the random number generator.

    Returns
    -------
    events : list of Event

    """

    if not 0.0 <= neg_frac <= 1.0:
        raise ValueError("neg_frac must be between 0 and 1, not {}".format(neg_frac))

    rng = np.random.default_rng(seed)

    pxy = rng.normal(scale=pt_scale, size=(n_events, n_particles, 2))
    pz = rng.normal(scale=pz_scale, size=(n_events, n_particles, 1))
    spatial = np.concatenate([pxy, pz], axis=-1)

    # massless particles
    energy = np.linalg.norm(spatial, axis=-1, keepdims=True)
    momenta = np.concatenate([energy, spatial], axis=-1)

    signs = np.where(rng.random(n_events) < neg_frac, -1.0, 1.0)
    variations = rng.uniform(0.8, 1.2, size=n_events)

    return [Event((sign, sign * variation), {JET_TYPE_ID : event_momenta})
            for sign, variation, event_momenta in zip(signs, variations, momenta)]
