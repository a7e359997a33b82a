"""Tests - Test suite and test guests."""
