"""Durable queue of deferred indexing and removal work."""
