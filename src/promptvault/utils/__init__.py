"""Shared helpers: hashing, clock, logging and retry."""
