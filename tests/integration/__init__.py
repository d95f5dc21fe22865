"""Integration tests.

Purpose
- Exercise the bootstrap against a real Cassandra node.

Guidelines
- Use realistic configuration and setup/teardown per test or suite.
- Minimize mocking; prefer a well-scoped test container.
- Mark as 'integration' and keep them slower but reliable.
"""
