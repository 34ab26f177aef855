"""
Monitoring infrastructure (logging and metrics).
"""

from mecene.infrastructure.monitoring.logger import JSONFormatter, setup_logging

__all__ = ["JSONFormatter", "setup_logging"]
