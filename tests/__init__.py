"""
Graph Gateway Test Suite
========================

Test organization:
- tests/unit/                    - Shared library tests (no external dependencies)
- tests/services/graph_gateway/  - Normalizer, operations, dispatcher and HTTP tests

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest --cov=services --cov=shared
"""
