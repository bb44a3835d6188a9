"""Slowlog to loadspec conversion."""
