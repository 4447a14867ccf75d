"""Liveness endpoint for probes."""
