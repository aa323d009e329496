"""Distance between collision events based on the momenta of their
particles.

Particles are paired up by type and by their position within the type.
For every pair of particles the difference of the 3-momenta and the
difference of the transverse momenta are combined to

.. math::
    d_i^2 = |\\vec{p}_a - \\vec{p}_b|^2 + \\tau^2 (p_{T,a} - p_{T,b})^2

and the distance between two events is the quadratic sum over all
pairs, :math:`d = \\sqrt{\\sum_i d_i^2}`.

The transverse momentum is taken with respect to the beam axis, which
is the z-axis. The parameter :math:`\\tau` sets how strongly
differences in transverse momentum are emphasised, with 0 ignoring
them.

Because this is a Euclidean norm of the per-event image

    (px_1, py_1, pz_1, tau * pt_1, px_2, ...)

it satisfies the triangle inequality and the images can be searched
with a k-d tree.

"""

import numpy as np

from cellres.resampling.distances.distance import EuclideanImageDistance


class ScaledPtDistance(EuclideanImageDistance):
    """Euclidean distance of 3-momenta with an extra contribution
    proportional to the difference in transverse momentum.

    Parameters
    ----------
    pt_weight : float
        Non-negative weight of the transverse momentum difference.

    """

    def __init__(self, pt_weight=0.0):

        pt_weight = float(pt_weight)

        # also rejects nan
        if not pt_weight >= 0.0:
            raise ValueError("The pt weight must be non-negative, not {}".format(pt_weight))

        self.pt_weight = pt_weight

    def momenta_images(self, momenta):
        """Compute images from momenta.

        Parameters
        ----------
        momenta : arraylike of float of shape (..., n_particles, 4)

        Returns
        -------
        images : arraylike of float of shape (..., 4 * n_particles)

        """

        momenta = np.asarray(momenta, dtype=float)

        spatial = momenta[..., 1:]
        pt = np.hypot(momenta[..., 1], momenta[..., 2])

        images = np.concatenate([spatial, self.pt_weight * pt[..., np.newaxis]],
                                axis=-1)

        image_dim = images.shape[-2] * images.shape[-1]

        return images.reshape(images.shape[:-2] + (image_dim,))
