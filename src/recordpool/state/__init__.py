"""State/reducer layer.

This package is the single source of truth for how optimistic mutations and
settled fetch responses are merged into the record pool.
"""
