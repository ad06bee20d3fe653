"""Joidu Test Suite

Test organization:
- unit/focus/: energy advisor, hyperfocus guard, store, ticker, companion

Running tests:
    # All tests
    pytest

    # Specific module
    pytest tests/unit/focus/test_hyperfocus_guard.py
"""
