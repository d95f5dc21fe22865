"""trellis-cassandra test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Real interactions with a Cassandra node (Testcontainers).
- e2e/          : The command-line interface driven through Click's runner.
- fixtures/     : Pytest plugins providing shared fixtures (no tests here).
- helpers/      : Shared utilities and fakes (no tests here).

General guidance
- Keep unit fast and deterministic (no real I/O); prefer fakes over mocks at boundaries.
  `helpers/fake_cassandra.py` stands in for the driver's `Cluster`.
- Integration hits a real cluster with realistic setup/teardown.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Suggested markers: unit, integration, e2e, property, slow
"""
