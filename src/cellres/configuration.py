from copy import deepcopy
import logging

from cellres.resampling.neighbours.search import NeighbourSearch
from cellres.resampling.redistribution import Redistribution


def _to_enum(enum_class, value, option):
    """Convert an enum member or its value to the enum member."""

    if isinstance(value, enum_class):
        return value

    try:
        return enum_class(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_class)
        raise ValueError("Invalid {} '{}', must be one of: {}".format(option, value, valid)) \
            from None


class Configuration():
    """Options for a cell resampler.

    Any option that is not given (or None) is set to the class default.

    Parameters
    ----------
    neighbour_search : NeighbourSearch or str
        The nearest neighbour search algorithm, 'tree' or 'naive'.

    pt_weight : float
        Non-negative weight of the transverse momentum difference in the
        distance between events.

    redistribution : Redistribution or str
        The rule for redistributing weights within a cell, 'mean' or
        'absolute'.

    leaf_size : int
        Leaf size for the k-d tree of the tree search.

    """

    DEFAULT_NEIGHBOUR_SEARCH = NeighbourSearch.TREE
    DEFAULT_PT_WEIGHT = 0.0
    DEFAULT_REDISTRIBUTION = Redistribution.MEAN
    DEFAULT_LEAF_SIZE = 16

    OPTIONS = ('neighbour_search', 'pt_weight', 'redistribution', 'leaf_size',)

    def __init__(self,
                 neighbour_search=None,
                 pt_weight=None,
                 redistribution=None,
                 leaf_size=None,
    ):

        if neighbour_search is not None:
            self._neighbour_search = _to_enum(NeighbourSearch, neighbour_search,
                                              'neighbour search')
        else:
            self._neighbour_search = self.DEFAULT_NEIGHBOUR_SEARCH

        if pt_weight is not None:
            pt_weight = float(pt_weight)

            if not pt_weight >= 0.0:
                raise ValueError("pt_weight must be non-negative, not {}".format(pt_weight))

            self._pt_weight = pt_weight
        else:
            self._pt_weight = self.DEFAULT_PT_WEIGHT

        if redistribution is not None:
            self._redistribution = _to_enum(Redistribution, redistribution,
                                            'redistribution')
        else:
            self._redistribution = self.DEFAULT_REDISTRIBUTION

        if leaf_size is not None:
            leaf_size = int(leaf_size)

            if leaf_size < 1:
                raise ValueError("leaf_size must be positive, not {}".format(leaf_size))

            self._leaf_size = leaf_size
        else:
            self._leaf_size = self.DEFAULT_LEAF_SIZE

    @property
    def neighbour_search(self):
        return self._neighbour_search

    @property
    def pt_weight(self):
        return self._pt_weight

    @property
    def redistribution(self):
        return self._redistribution

    @property
    def leaf_size(self):
        return self._leaf_size

    def to_dict(self):
        """The options as a dictionary of plain values."""

        return {
            'neighbour_search' : self._neighbour_search.value,
            'pt_weight' : self._pt_weight,
            'redistribution' : self._redistribution.value,
            'leaf_size' : self._leaf_size,
        }

    @classmethod
    def from_dict(cls, options):
        """Construct a configuration from a dictionary of options."""

        unknown = set(options).difference(cls.OPTIONS)
        if len(unknown) > 0:
            raise ValueError("Unknown configuration options: {}".format(
                ", ".join(sorted(unknown))))

        return cls(**options)

    def reparametrize(self, **kwargs):
        """Make a new configuration with some options changed.

        Returns
        -------
        configuration : Configuration

        """

        options = deepcopy(self.to_dict())
        options.update(kwargs)

        logging.debug("Reparametrizing configuration with {}".format(kwargs))

        return self.from_dict(options)

    def __eq__(self, other):

        if not isinstance(other, Configuration):
            return NotImplemented

        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return "Configuration({})".format(
            ", ".join("{}={!r}".format(key, value) for key, value in self.to_dict().items()))
