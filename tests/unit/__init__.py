"""
Unit Tests - Testing Individual Components in Isolation.

Test Files:
    - test_history_store.py: Replace, merge and ordered insert
    - test_sync_engine.py: Strategy selection of get/set
    - test_exclusion_filter.py: Hidden categories and reserved prefix
    - test_entry_validator.py: Boundary validation
    - test_config_loader.py: Configuration loading/validation
"""
