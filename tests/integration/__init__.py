"""
Integration Tests - End-to-End Scrape Tests.

These tests verify that all components work together correctly: a
small BINRPC server on a local socket answers with canned replies and
the exporter scrapes it through the real transport.

Test Files:
    - test_scrape_over_binrpc.py: Full scrape cycles over tcp and unix sockets
    - test_exposition.py: Rendered Prometheus text for every method
"""
