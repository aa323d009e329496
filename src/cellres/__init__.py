"""Cell resampling of simulated collision events.

Samples of collision events from higher-order calculations contain
events with negative weights. Cell resampling groups each negative
weight event with its nearest neighbours in momentum space and
redistributes the weights within that group, reducing or removing the
negative weights while preserving the sum of all weights.

The main entry point is `cellres.resampling.resamplers.cell.CellResampler`.

"""

__version__ = '0.1.0'
