"""
RankEval Observability Module

Logging goes through loguru; this package only decides where it goes.
"""

from rankeval.observability.log import configure_logging

__all__ = [
    "configure_logging",
]
