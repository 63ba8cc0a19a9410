"""
Validation Package - Boundary Checks for History Entries.

Entries without a usable sequence number are rejected before they can
reach the store; see EntryValidator.
"""

from report_history.validation.entry_validator import EntryValidator

__all__ = ["EntryValidator"]
