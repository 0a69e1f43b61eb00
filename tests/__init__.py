"""
Kamailio Exporter Test Suite.

Test Organization:
    - unit/: Component tests with canned records and the mock transport
    - integration/: Full scrape cycles, including a real BINRPC socket
    - fixtures/: Shared test data
"""
