"""Command-line interface for trellis-cassandra."""
