"""Test suite for prefbackup."""
