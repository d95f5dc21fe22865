"""Allow ``python -m trellis_cassandra``."""

from trellis_cassandra.entrypoints.cli.main import trellis_cassandra

if __name__ == "__main__":
    trellis_cassandra()  # pylint: disable=no-value-for-parameter
