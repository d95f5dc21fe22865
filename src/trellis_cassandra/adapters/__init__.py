"""Adapters (infrastructure) for trellis-cassandra.

Provide concrete implementations of the application contracts: the Cassandra
connection manager, schema bootstrapper and codecs, plus retry policies.

Dependency rule: may import `trellis_cassandra.domain` and
`trellis_cassandra.interfaces`; neither may import this package.
"""
