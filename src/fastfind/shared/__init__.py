"""Shared utilities, constants, errors and protocols for FastFind."""
