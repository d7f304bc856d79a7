"""Tests for the Flipr library."""
