"""Base classes for distances between collision events.

Distances work on 'images' of events: a fixed transformation of the
event computed once, so that the neighbour searches can compare many
events cheaply. Searches only ever call 'image_distances', comparing
one image against an array of them.

When the images are flat arrays of floats and the distance is the
Euclidean norm of their difference, the images can be put into a
spatial tree. 'EuclideanImageDistance' provides this for subclasses
that only map momenta to images.

"""

import numpy as np

from cellres.resampling.resamplers.resampler import ShapeMismatchError


class Distance(object):
    """Abstract base class for distances between events.

    Subclasses implement 'image' and 'image_distances'.

    """

    def image(self, event):
        """Transform an event into the representation compared by
        'image_distances'."""
        raise NotImplementedError

    def image_distances(self, image, images):
        """Distances between one image and an array of images.

        Parameters
        ----------
        image : arraylike of float

        images : arraylike of float
            One image per row.

        Returns
        -------
        distances : arraylike of float

        """
        raise NotImplementedError

    def image_distance(self, image_a, image_b):

        return float(self.image_distances(image_a, np.asarray(image_b)[np.newaxis, ...])[0])

    def distance(self, event_a, event_b):
        """Compute the distance between two events.

        Raises
        ------
        ShapeMismatchError
            If the events have different particle content.

        """

        if event_a.shape.type_counts != event_b.shape.type_counts:
            raise ShapeMismatchError("Cannot compute the distance between events with "
                                     "particle content {} and {}".format(
                                         event_a.shape.type_counts,
                                         event_b.shape.type_counts))

        return self.image_distance(self.image(event_a),
                                   self.image(event_b))


class EuclideanImageDistance(Distance):
    """Distance for which images are flat arrays of floats and the
    distance is the Euclidean norm of their difference.

    Subclasses must implement 'momenta_images', which maps an array of
    momenta of shape (..., n_particles, 4) to images of shape
    (..., image_dim).

    """

    def momenta_images(self, momenta):
        raise NotImplementedError

    def image(self, event):
        return self.momenta_images(event.flat_momenta())

    def image_distances(self, image, images):

        diff = np.asarray(images) - np.asarray(image)

        return np.sqrt(np.sum(diff * diff, axis=-1))
