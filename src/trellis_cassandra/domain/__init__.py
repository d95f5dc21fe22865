"""Domain layer for trellis-cassandra.

Holds the value types the repository stores through the Cassandra codecs.
This package is deliberately technology-agnostic.

Dependency rule: do not import from `trellis_cassandra.adapters` or
`trellis_cassandra.entrypoints`.
"""
