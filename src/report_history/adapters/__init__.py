"""
Adapters Package - Infrastructure Implementations.

Concrete implementations of the interfaces package:
    - InMemoryHistorySource: Fake remote service for development/testing

Design Principles:
    - All adapters implement their respective protocols
    - Easily swappable via Dependency Injection
    - No cache logic in adapters
"""

from report_history.adapters.memory_source import InMemoryHistorySource

__all__ = ["InMemoryHistorySource"]
