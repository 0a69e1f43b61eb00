"""
Test Fixtures - Shared Test Data and Configurations.

This package contains reusable test fixtures:
    - sample_config.yaml: Sample exporter configuration

Canned BINRPC replies live in kamailio_exporter.adapters.mock_transport
so that they can also drive the exporter during development.
"""
