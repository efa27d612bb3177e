"""Shared utilities for weatherfx."""
