"""
Unit Tests - Testing Individual Components in Isolation.

Each component is tested in isolation with canned records or the mock
transport. Unit tests should be fast, deterministic, and focused.

Test Files:
    - test_metric_catalog.py: Catalog registration and naming
    - test_response_decoder.py: Records to field tree
    - test_decoded_field.py: Field coercion and traversal
    - test_flat_projectors.py: Flat and code-bucket projection
    - test_dispatcher_projector.py: Dispatcher target projection
    - test_peer_projector.py: Peer list projection
    - test_scrape_orchestrator.py: Scrape cycle and health
    - test_binrpc_codec.py: BINRPC framing and sockets
    - test_config_loader.py: Configuration loading/validation
    - test_config_validator.py: Methods checked against the catalog
    - test_health_state.py: Exporter health counters
    - test_prometheus_collector.py: prometheus_client bridge
    - test_cli.py: Command-line entry point
"""
