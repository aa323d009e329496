"""Resampling functionality for collision event samples.

Role of Resampling
------------------

Event generators at next-to-leading order and beyond produce events
with negative weights. The negative weights are correct, but they
inflate the statistical uncertainty of every observable and with that
the number of events needed for a given precision.

A resampler takes the events together with their weights and rewrites
the weights such that observables are (nearly) unchanged. Cell
resampling does this locally: each negative weight event is the seed
of a cell containing its nearest neighbours in momentum space, and the
weights in the cell are redistributed. As long as the cells are small
compared to the resolution of an observable, the observable does not
change, while the sum of all weights, the cross section, is preserved
exactly.

Outline of the resampling sub-package
-------------------------------------

Distances
=========

A distance metric compares two events. As in other parts of this
package, distances work on 'images' of events, which are vectors that
are cheap to compare. See `cellres.resampling.distances`.

Neighbour searches
==================

Growing a cell requires repeatedly finding the nearest event to the
seed that is not in the cell yet. This is done either with a k-d tree
or by a linear scan. See `cellres.resampling.neighbours`.

Cells and redistribution
========================

The cells themselves and the algorithm to grow them are in
`cellres.resampling.cell`, the rules for redistributing weights within
a cell in `cellres.resampling.redistribution`.

Resamplers
==========

The resamplers tie everything together, they own the events and expose
the operations for adding events, resampling and retrieving the final
weights. See `cellres.resampling.resamplers`.

"""
