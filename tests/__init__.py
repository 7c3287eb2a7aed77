"""Test suite for the Ringside API."""
