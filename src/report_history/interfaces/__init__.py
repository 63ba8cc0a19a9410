"""
Interfaces Layer - Abstract Protocols for Dependencies.

Protocols:
    - HistorySource: Remote access to full or incremental histories

Design Principles:
    - Use typing.Protocol (not ABC) for Pythonic interfaces
    - No implementation details leak into interfaces
"""

from report_history.interfaces.history_source import HistorySource

__all__ = ["HistorySource"]
