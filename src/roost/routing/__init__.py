"""Routing — route table, JSON route cache, and the dispatching Router.

The table is built from discovered controllers (or loaded from the
cache) and swapped in whole; it is never mutated in place.
"""
