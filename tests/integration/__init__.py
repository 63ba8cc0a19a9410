"""
Integration Tests - Engine, Store and In-Memory Source Together.
"""
