"""Client orchestrator: the per-voter vote and reveal state machine.

Vote path:    IDLE -> ENCRYPTING -> SUBMITTING -> CONFIRMING -> IDLE
Reveal path:  IDLE -> AUTHORIZING -> DECRYPTING -> IDLE

Each path has one "operation in flight" guard, taken before the first
suspension point. A second request on a busy path is rejected as a no-op.
Any failure returns the path straight to IDLE with a status message; the
ledger stays the single source of truth for whether a vote counted.

Subscribers receive an OrchestratorSnapshot after every transition.
Once close() is called, results still in flight are dropped instead of
being applied.
"""

from __future__ import annotations

from collections.abc import Callable
from uuid import uuid4

import structlog
from structlog import get_logger

from sealedvote.application.ports.encryption import EncryptionProtocol
from sealedvote.application.ports.vote_ledger import VoteLedgerProtocol
from sealedvote.application.services.authorization_cache import AuthorizationCache
from sealedvote.application.services.decryption_coordinator import DecryptionCoordinator
from sealedvote.application.services.decryption_result_cache import DecryptionResultCache
from sealedvote.application.services.submission_coordinator import SubmissionCoordinator
from sealedvote.config.client_config import DEFAULT_VOTE_CLIENT_CONFIG, VoteClientConfig
from sealedvote.domain.errors import (
    AuthorizationExpiredError,
    EncryptionFailedError,
    LedgerTransportError,
    SealedVoteError,
)
from sealedvote.domain.exceptions import ErrorKind
from sealedvote.domain.models.decryption import (
    NO_VOTE_CLEARTEXT,
    DecryptionRequest,
    RevealedVote,
)
from sealedvote.domain.models.handle import ZERO_HANDLE, Handle, normalize_identity
from sealedvote.domain.models.orchestrator_state import (
    OrchestratorSnapshot,
    RevealPhase,
    SubmitPhase,
)
from sealedvote.domain.models.vote_choice import (
    ENCODING_BY_OPERATION,
    LedgerOperation,
    validate_choice,
)

logger = get_logger(__name__)

SnapshotListener = Callable[[OrchestratorSnapshot], None]


class ClientOrchestrator:
    """Sequences encrypt -> submit -> refresh -> decrypt for one voter.

    Example:
        >>> orchestrator = session.connect(voter_id)
        >>> await orchestrator.refresh_handle()
        >>> await orchestrator.submit_vote(3)
        True
        >>> (await orchestrator.decrypt_my_vote()).choice
        3
    """

    def __init__(
        self,
        voter_id: str,
        ledger: VoteLedgerProtocol,
        encryption: EncryptionProtocol,
        submission: SubmissionCoordinator,
        authorization: AuthorizationCache,
        decryption: DecryptionCoordinator,
        results: DecryptionResultCache,
        config: VoteClientConfig = DEFAULT_VOTE_CLIENT_CONFIG,
    ) -> None:
        self._voter_id = normalize_identity(voter_id)
        self._ledger = ledger
        self._encryption = encryption
        self._submission = submission
        self._authorization = authorization
        self._decryption = decryption
        self._results = results
        self._config = config

        self._submit_phase = SubmitPhase.IDLE
        self._reveal_phase = RevealPhase.IDLE
        self._handle: Handle | None = None
        self._status = ""
        self._last_error: ErrorKind | None = None
        self._closed = False
        self._listeners: list[SnapshotListener] = []
        # Reads are numbered when issued; a read only applies if no later
        # read has been applied already.
        self._reads_issued = 0
        self._last_read_applied = 0
        self._log = logger.bind(voter_id=self._voter_id, contract_id=ledger.contract_id)

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def voter_id(self) -> str:
        return self._voter_id

    @property
    def contract_id(self) -> str:
        return self._ledger.contract_id

    @property
    def submit_phase(self) -> SubmitPhase:
        return self._submit_phase

    @property
    def reveal_phase(self) -> RevealPhase:
        return self._reveal_phase

    @property
    def handle(self) -> Handle | None:
        """Last handle read from the ledger, None before the first read."""
        return self._handle

    @property
    def status(self) -> str:
        return self._status

    @property
    def last_error(self) -> ErrorKind | None:
        return self._last_error

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def has_voted(self) -> bool:
        return self._handle is not None and not self._handle.is_zero

    @property
    def can_vote(self) -> bool:
        return not self._closed and self._submit_phase is SubmitPhase.IDLE

    @property
    def is_decrypted(self) -> bool:
        """True when the cleartext of the current, non-zero handle is cached."""
        return self.has_voted and self._handle in self._results

    @property
    def can_decrypt(self) -> bool:
        return (
            not self._closed
            and self._reveal_phase is RevealPhase.IDLE
            and self.has_voted
            and not self.is_decrypted
        )

    @property
    def clear_vote(self) -> int | None:
        """Cleartext of the current handle.

        NO_VOTE_CLEARTEXT for ZERO_HANDLE, None when no handle was read yet
        or the current handle has not been decrypted.
        """
        if self._handle is None:
            return None
        if self._handle.is_zero:
            return NO_VOTE_CLEARTEXT
        return self._results.get(self._handle)

    @property
    def revealed(self) -> RevealedVote | None:
        clear = self.clear_vote
        if clear is None or self._handle is None:
            return None
        return RevealedVote(handle=self._handle, choice=clear)

    def snapshot(self) -> OrchestratorSnapshot:
        return OrchestratorSnapshot(
            voter_id=self._voter_id,
            submit_phase=self._submit_phase,
            reveal_phase=self._reveal_phase,
            handle=self._handle,
            clear_vote=self.clear_vote,
            status=self._status,
            last_error=self._last_error,
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register listener for state transitions.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Vote path
    # ------------------------------------------------------------------

    async def submit_vote(self, choice: int) -> bool:
        """Encrypt choice, submit it, and refresh the stored handle.

        Returns:
            True once the ledger confirmed the vote and the new handle was
            read back. False if the request was rejected or failed; the
            reason is in ``status``.
        """
        if self._closed:
            self._log.info("submit_rejected_closed")
            return False
        if self._submit_phase is not SubmitPhase.IDLE:
            self._log.info("submit_rejected_in_flight", phase=self._submit_phase.value)
            return False

        try:
            validate_choice(choice, self._config.max_choice)
        except SealedVoteError as exc:
            self._finish_submit(f"submit_vote() failed: {exc}", exc.kind)
            return False

        encoding = ENCODING_BY_OPERATION[LedgerOperation.SUBMIT_VOTE]
        self._set_submit(SubmitPhase.ENCRYPTING, f"Encrypting and voting for choice {choice}...")

        with structlog.contextvars.bound_contextvars(
            correlation_id=str(uuid4()), operation="submit_vote"
        ):
            try:
                try:
                    encrypted = await self._encryption.encrypt(
                        self.contract_id, self._voter_id, choice, encoding
                    )
                except SealedVoteError:
                    raise
                except Exception as exc:
                    raise EncryptionFailedError(str(exc)) from exc
                if self._closed:
                    return False

                self._set_submit(SubmitPhase.SUBMITTING, "Waiting for confirmation...")
                receipt = await self._submission.submit(
                    self._voter_id, encrypted.handle, encrypted.proof
                )
                if self._closed:
                    return False

                self._set_submit(SubmitPhase.CONFIRMING, "Refreshing stored vote...")
                await self._read_handle()
                if self._closed:
                    return False

                self._log.info("vote_confirmed", sequence=receipt.sequence)
                self._finish_submit(f"Vote updated to choice {choice}!", None)
                return True
            except SealedVoteError as exc:
                self._log.warning("vote_failed", error_kind=exc.kind.value, error=str(exc))
                self._finish_submit(f"submit_vote() failed: {exc}", exc.kind)
                return False
            except Exception as exc:
                self._log.exception("vote_failed_unexpected")
                self._finish_submit(
                    f"submit_vote() failed: {exc}", ErrorKind.TRANSPORT_FAILURE
                )
                return False
            finally:
                if self._submit_phase is not SubmitPhase.IDLE:
                    self._abandon_submit()

    async def refresh_handle(self) -> Handle | None:
        """Re-read the voter's handle from the ledger.

        Returns:
            The handle now held by the orchestrator (unchanged on failure).
        """
        if self._closed:
            return self._handle
        try:
            return await self._read_handle()
        except SealedVoteError as exc:
            self._log.warning("refresh_failed", error_kind=exc.kind.value, error=str(exc))
            self._report(f"refresh failed: {exc}", exc.kind)
            return self._handle
        except Exception as exc:
            self._log.exception("refresh_failed_unexpected")
            self._report(f"refresh failed: {exc}", ErrorKind.TRANSPORT_FAILURE)
            return self._handle

    # ------------------------------------------------------------------
    # Reveal path
    # ------------------------------------------------------------------

    async def decrypt_my_vote(self) -> RevealedVote | None:
        """Reveal the cleartext of the voter's current handle.

        The stored handle is read from the ledger first if none was read
        yet. A zero handle resolves to NO_VOTE_CLEARTEXT without contacting
        the oracle; an already decrypted handle returns its cached value.

        Returns:
            The revealed vote for the handle that is current when the
            request completes, or None if the request was rejected, failed,
            or the handle changed while decrypting.
        """
        if self._closed:
            return None
        if self._reveal_phase is not RevealPhase.IDLE:
            self._log.info("decrypt_rejected_in_flight", phase=self._reveal_phase.value)
            return None

        handle = self._handle
        if handle is None:
            # Nothing read yet: load the stored handle first.
            try:
                handle = await self._read_handle()
            except SealedVoteError as exc:
                self._log.warning("decrypt_failed", error_kind=exc.kind.value, error=str(exc))
                self._report(f"decrypt_my_vote() failed: {exc}", exc.kind)
                return None
            except Exception as exc:
                self._log.exception("decrypt_failed_unexpected")
                self._report(f"decrypt_my_vote() failed: {exc}", ErrorKind.TRANSPORT_FAILURE)
                return None
            if self._closed or handle is None:
                return None
            if self._reveal_phase is not RevealPhase.IDLE:
                # Another reveal started while the handle was loading.
                return None
        if handle.is_zero:
            self._status = "No vote stored."
            self._last_error = None
            self._notify()
            return RevealedVote(handle=ZERO_HANDLE, choice=NO_VOTE_CLEARTEXT)
        cached = self._results.get(handle)
        if cached is not None:
            return RevealedVote(handle=handle, choice=cached)

        self._set_reveal(RevealPhase.AUTHORIZING, "Authorizing decryption...")

        with structlog.contextvars.bound_contextvars(
            correlation_id=str(uuid4()), operation="decrypt_my_vote"
        ):
            try:
                token = await self._authorization.get_or_create(
                    self._voter_id, {self.contract_id}
                )
                if self._closed:
                    return None

                self._set_reveal(RevealPhase.DECRYPTING, "Decrypting vote...")
                cleartexts = await self._decryption.resolve(
                    [DecryptionRequest(handle=handle, contract_id=self.contract_id)],
                    token,
                )
                if self._closed:
                    return None

                # Judge against the handle current now, not at request time.
                if self._handle != handle:
                    self._log.info("decrypt_result_superseded", handle=handle.hex())
                    self._finish_reveal(
                        "Vote changed while decrypting; decrypt again to reveal it.",
                        None,
                    )
                    return None

                self._finish_reveal("Decryption completed!", None)
                return RevealedVote(handle=handle, choice=cleartexts[handle])
            except AuthorizationExpiredError as exc:
                # The next attempt must sign a fresh token.
                self._authorization.invalidate(self._voter_id)
                self._log.warning("decrypt_failed", error_kind=exc.kind.value)
                self._finish_reveal(f"decrypt_my_vote() failed: {exc}", exc.kind)
                return None
            except SealedVoteError as exc:
                self._log.warning("decrypt_failed", error_kind=exc.kind.value, error=str(exc))
                self._finish_reveal(f"decrypt_my_vote() failed: {exc}", exc.kind)
                return None
            except Exception as exc:
                self._log.exception("decrypt_failed_unexpected")
                self._finish_reveal(
                    f"decrypt_my_vote() failed: {exc}", ErrorKind.ORACLE_UNAVAILABLE
                )
                return None
            finally:
                if self._reveal_phase is not RevealPhase.IDLE:
                    self._abandon_reveal()

    # ------------------------------------------------------------------
    # Session end
    # ------------------------------------------------------------------

    def close(self) -> None:
        """End this voter's session.

        In-flight operations drop their results. Cached authorization
        tokens for the voter are invalidated and the status is cleared.
        """
        if self._closed:
            return
        self._closed = True
        self._authorization.invalidate(self._voter_id)
        self._status = ""
        self._last_error = None
        self._log.info("orchestrator_closed")
        self._notify()
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _read_handle(self) -> Handle | None:
        self._reads_issued += 1
        read_number = self._reads_issued
        try:
            handle = await self._ledger.encrypted_vote_of(self._voter_id)
        except (TimeoutError, OSError) as exc:
            raise LedgerTransportError("encrypted_vote_of", str(exc)) from exc

        if self._closed or read_number < self._last_read_applied:
            return self._handle
        self._last_read_applied = read_number
        if handle != self._handle:
            self._log.info(
                "vote_handle_changed",
                old=self._handle.hex() if self._handle else None,
                new=handle.hex(),
            )
            self._handle = handle
            self._notify()
        return handle

    def _report(self, status: str, error: ErrorKind | None) -> None:
        self._status = status
        self._last_error = error
        self._notify()

    def _set_submit(self, phase: SubmitPhase, status: str) -> None:
        self._submit_phase = phase
        self._status = status
        self._notify()

    def _finish_submit(self, status: str, error: ErrorKind | None) -> None:
        self._submit_phase = SubmitPhase.IDLE
        self._status = status
        self._last_error = error
        self._notify()

    def _abandon_submit(self) -> None:
        # Cancelled, or dropped after close().
        self._submit_phase = SubmitPhase.IDLE
        if not self._closed:
            self._status = "submit_vote() cancelled"
        self._notify()

    def _set_reveal(self, phase: RevealPhase, status: str) -> None:
        self._reveal_phase = phase
        self._status = status
        self._notify()

    def _finish_reveal(self, status: str, error: ErrorKind | None) -> None:
        self._reveal_phase = RevealPhase.IDLE
        self._status = status
        self._last_error = error
        self._notify()

    def _abandon_reveal(self) -> None:
        self._reveal_phase = RevealPhase.IDLE
        if not self._closed:
            self._status = "decrypt_my_vote() cancelled"
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                self._log.exception("snapshot_listener_failed")
