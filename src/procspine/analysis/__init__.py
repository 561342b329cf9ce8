"""Metric records, identities and the stream registry."""
