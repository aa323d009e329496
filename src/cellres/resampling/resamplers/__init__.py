"""Resampler framework and library.

This sub-package provides an interface for implementing new resamplers
that are able to reuse the event store and its life cycle.

Resamplers minimally must implement a single method 'resample'.

"""
