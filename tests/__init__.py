"""Test suite for timewarp.

Structure:
- unit/: Utilities (logging, exceptions, configuration, profiling, validation)
- core/: Frame extraction, distances, cost matrix, traceback, links
- integration/: Alignment properties checked end to end
- test_api.py: Public entry points and concrete scenarios
"""
