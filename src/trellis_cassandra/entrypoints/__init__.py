"""Entrypoints (inbound adapters) for trellis-cassandra.

Expose the bootstrap to the outside world as a command-line interface.

Dependency rule: import `trellis_cassandra.bootstrap` and `trellis_cassandra.config`;
avoid reaching into adapters beyond their public errors.
"""
