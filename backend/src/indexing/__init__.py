"""Background loops that drain the indexing and removal queues."""
