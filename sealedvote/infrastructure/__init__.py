"""Infrastructure layer: ledger implementation, local collaborator stubs
and observability."""
