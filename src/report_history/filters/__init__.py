"""
Filters Package - Presentation-Time Exclusion.

    - ExclusionFilter: Hides configured action categories and any action
      name starting with the reserved prefix
"""

from report_history.filters.exclusion import ExclusionFilter

__all__ = ["ExclusionFilter"]
