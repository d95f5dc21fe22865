"""Cluster commands for the trellis-cassandra CLI.

Behavior
- Human-oriented notices go to **stderr**; data (cluster facts, DDL) goes to
  **stdout** so it can be piped.
- ``connect`` blocks while the cluster is unreachable, exactly like the
  application's own startup, unless ``--max-attempts`` bounds it.

Failure modes
- Missing/invalid configuration variables → ``ClickException`` with guidance.
- Fatal startup errors (malformed query, interrupted wait, retries exhausted)
  → ``ClickException`` carrying the error message, exit code 1.
"""

from __future__ import annotations

import click

from trellis_cassandra import config
from trellis_cassandra.adapters.cassandra.errors import FatalStartupError
from trellis_cassandra.adapters.cassandra.schema import ddl_statements
from trellis_cassandra.adapters.retry_policies import DEFAULT_RETRY_DELAY, FixedDelayRetry
from trellis_cassandra.bootstrap import build_session_provider

from .helpers import error, success, warn

MISSING_CONFIG_HINT = (
    "Set the cluster location before running this command, e.g.:\n"
    f"  export {config.ADDRESS_ENV}=127.0.0.1\n"
    f"  export {config.PORT_ENV}=9042\n"
    f"  export {config.BINARY_SERVICE_ENV}=true"
)


@click.command()
@click.option(
    "--max-attempts",
    type=click.IntRange(min=1),
    default=None,
    help="Give up after this many connection attempts (default: wait forever).",
)
@click.option(
    "--retry-delay",
    type=click.FloatRange(min=0),
    default=DEFAULT_RETRY_DELAY,
    show_default=True,
    help="Seconds to wait between connection attempts.",
)
def connect(max_attempts: int | None, retry_delay: float) -> None:
    """Connect to the cluster, creating the Trellis schema if it is missing."""
    try:
        cluster_config = config.load_cluster_config()
    except config.ConfigurationError as e:
        raise click.ClickException(f"{e}\n\n{MISSING_CONFIG_HINT}") from e

    sessions = build_session_provider(
        retry_policy=FixedDelayRetry(retry_delay, max_attempts)
    )
    try:
        session = sessions.get_session(cluster_config)
    except FatalStartupError as e:
        error("Cannot establish the Cassandra session")
        raise click.ClickException(str(e)) from e

    try:
        metadata = session.cluster.metadata
        success(f"Connected to {cluster_config.address}:{cluster_config.port}")
        click.echo(f"Cluster  : {metadata.cluster_name}")
        click.echo(f"Hosts    : {', '.join(str(h) for h in metadata.all_hosts())}")
        click.echo(f"Keyspace : {session.keyspace}")
        storage = "cluster" if cluster_config.binary_service_enabled else "external"
        click.echo(f"Binaries : {storage}")
        if not cluster_config.binary_service_enabled:
            warn("Cluster binary storage is off; binaries need an external service.")
    finally:
        sessions.close()


@click.command()
@click.option(
    "--binary/--no-binary",
    default=True,
    envvar=config.BINARY_SERVICE_ENV,
    show_default=True,
    show_envvar=True,
    help="Include the Binarydata table.",
)
def ddl(binary: bool) -> None:
    """Print the statements the schema bootstrap issues, in order."""
    for statement in ddl_statements(binary):
        click.echo(statement)
