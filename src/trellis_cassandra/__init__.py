"""trellis-cassandra

Cassandra substrate for a Trellis linked-data repository. Acquires a cluster
session under partial availability, creates the Trellis keyspace and tables
when they are missing, and registers the value codecs the repository's
storage services rely on.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
