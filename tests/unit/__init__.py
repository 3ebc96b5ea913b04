"""Unit tests for individual components in isolation.

Coverage:
    - config: Environment loading and validation
    - models: Payload normalisation and defaults
    - session: Chat submit lifecycle and history loading
    - knowledge: Busy exclusion, reload-after-mutation, delete confirmation
    - status: Per-probe failure isolation

Uses AsyncMock gateways so requests can be counted and responses scripted.
"""
