"""Vote ledger implementations."""

from sealedvote.infrastructure.ledger.in_memory_vote_ledger import InMemoryVoteLedger

__all__: list[str] = ["InMemoryVoteLedger"]
