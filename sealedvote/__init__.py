"""
SealedVote - Encrypted Vote Lifecycle

Client-side coordination for privately cast, revisable votes:
voters submit an encrypted choice to a ledger, may replace it at any
time, and can later reveal their own choice through an authorized
decryption flow. The plaintext choice never reaches the ledger.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
