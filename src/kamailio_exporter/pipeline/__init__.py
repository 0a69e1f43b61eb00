"""
Pipeline Package - Scrape Orchestration.

Components:
    - ScrapeOrchestrator: Runs one connect/call/decode/project cycle
    - ScrapeResult: Samples and health series of one cycle
"""

from kamailio_exporter.pipeline.scrape_orchestrator import (
    ScrapeOrchestrator,
    ScrapeResult,
)

__all__ = ["ScrapeOrchestrator", "ScrapeResult"]
