"""End-to-end tests.

Purpose
- Drive the `trellis-cassandra` command line the way an operator would.

Guidelines
- Invoke the top-level group through Click's CliRunner.
- Assert on exit codes and user-visible output (stdout data, stderr notices).
- Point `connect` at the in-process fake node; real clusters belong in integration/.
"""
