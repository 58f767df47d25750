"""Domain layer for SealedVote.

Pure value types and errors. This package imports nothing from the
application, infrastructure or bootstrap layers.
"""
