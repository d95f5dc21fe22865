"""Interfaces (application boundary) for trellis-cassandra.

Defines framework-free contracts shared by adapters and the bootstrap layer,
such as the retry policy used while waiting for the cluster.

Dependency rule: this package is independent; do not import from any
`trellis_cassandra.*` modules.
"""
