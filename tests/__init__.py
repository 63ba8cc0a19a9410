"""
Test Suite for Report History.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: Engine against the in-memory source
    - fixtures/: Shared test fixtures and sample data

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest --cov=src/report_history         # With coverage
"""
