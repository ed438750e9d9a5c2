"""Index storage layer.

This module persists the versioned bundle index and its JSON payload.
It powers lookups, merges, and the SDK client.
"""
