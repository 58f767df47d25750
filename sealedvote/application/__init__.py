"""Application layer: ports for external collaborators and the services
that coordinate the encrypted vote lifecycle."""
