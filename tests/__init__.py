"""Test suite for the pytest-platina package.

This package contains unit and integration tests validating golden
file parsing and writing, case comparisons, run aggregation, pytest
integration, and command-line utilities.
"""
