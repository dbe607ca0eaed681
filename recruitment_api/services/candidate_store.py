"""Transactional persistence for candidates and their job offer bindings."""

import asyncio
from contextlib import asynccontextmanager, contextmanager
from datetime import datetime
from enum import Enum
from typing import AsyncIterator, Iterator, List, Optional

import structlog
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from recruitment_api.models import Candidate, CandidateJobOffer, JobOffer

logger = structlog.get_logger()


class DuplicateCandidateError(Exception):
    """Raised when the unique email constraint rejects a candidate insert."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Candidate with email {email} already exists")


class TransactionState(str, Enum):
    """Lifecycle of a store transaction."""
    not_started = "not_started"
    open = "open"
    committed = "committed"
    rolled_back = "rolled_back"


class StoreTransaction:
    """
    Guard over a single store transaction.

    Obtained from ``CandidateStore.transaction()``. Leaving the block
    without a successful ``commit()`` rolls the transaction back exactly once.
    """

    def __init__(self, store: "CandidateStore"):
        self._store = store
        self.state = TransactionState.not_started

    @property
    def is_open(self) -> bool:
        return self.state is TransactionState.open

    def open(self) -> None:
        if self.state is not TransactionState.not_started:
            raise RuntimeError(f"Cannot open transaction in state {self.state.value}")
        self._store.begin_transaction()
        self.state = TransactionState.open

    def commit(self) -> None:
        if not self.is_open:
            raise RuntimeError(f"Cannot commit transaction in state {self.state.value}")
        self._store.commit_transaction()
        self.state = TransactionState.committed

    def rollback(self) -> None:
        if not self.is_open:
            return
        self.state = TransactionState.rolled_back
        self._store.rollback_transaction()


class CandidateStore:
    """
    Persistence boundary for candidate registration.

    Write-path operations run on the request session so they share one
    transaction. Async callers hand each call to ``asyncio.to_thread`` one
    at a time, so the request session is never used by two threads at once.
    The paginated read path opens its own short-lived sessions so the count
    and the page fetch can run concurrently.
    """

    def __init__(self, db: Session, session_factory: Optional[sessionmaker] = None):
        self.db = db
        self._session_factory = session_factory or sessionmaker(
            bind=db.get_bind(),
            autocommit=False,
            autoflush=False,
        )

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def begin_transaction(self) -> None:
        """Start the explicit write transaction."""
        if self.db.in_transaction():
            # Lookups before the write autobegin a read transaction; end it
            self.db.commit()
        self.db.begin()

    def commit_transaction(self) -> None:
        self.db.commit()

    def rollback_transaction(self) -> None:
        self.db.rollback()

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """
        Open a transaction scoped to the ``with`` block.

        Usage:
            with store.transaction() as tx:
                store.insert_candidate(...)
                tx.commit()
        """
        tx = StoreTransaction(self)
        tx.open()
        try:
            yield tx
        finally:
            if tx.is_open:
                logger.info("Rolling back candidate transaction")
                tx.rollback()

    @asynccontextmanager
    async def open_transaction(self) -> AsyncIterator[StoreTransaction]:
        """
        Async form of ``transaction()`` for use inside request handlers.

        Begin and rollback run in a worker thread so a lock wait never
        blocks the event loop. Commit the same way:

            async with store.open_transaction() as tx:
                await asyncio.to_thread(store.insert_candidate, ...)
                await asyncio.to_thread(tx.commit)
        """
        tx = StoreTransaction(self)
        await asyncio.to_thread(tx.open)
        try:
            yield tx
        finally:
            if tx.is_open:
                logger.info("Rolling back candidate transaction")
                await asyncio.to_thread(tx.rollback)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_candidate_by_email(self, email: str) -> Optional[int]:
        row = self.db.query(Candidate.id).filter(Candidate.email == email).first()
        return row[0] if row else None

    def find_job_offers_by_ids(self, ids: List[int]) -> List[int]:
        if not ids:
            return []
        return [
            row[0]
            for row in self.db.query(JobOffer.id).filter(JobOffer.id.in_(ids)).all()
        ]

    def find_candidate_by_id(self, candidate_id: int) -> Optional[Candidate]:
        return self.db.query(Candidate).filter(Candidate.id == candidate_id).first()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert_candidate(
        self,
        first_name: str,
        last_name: str,
        email: str,
        recruitment_status: str,
        consent_date: datetime,
    ) -> Optional[int]:
        """
        Insert a candidate row and return its generated id.

        Raises:
            DuplicateCandidateError: If another candidate already owns the email
        """
        candidate = Candidate(
            first_name=first_name,
            last_name=last_name,
            email=email,
            recruitment_status=recruitment_status,
            consent_date=consent_date,
        )
        self.db.add(candidate)
        try:
            self.db.flush()
        except IntegrityError as e:
            if "email" in str(e.orig).lower():
                raise DuplicateCandidateError(email) from e
            raise
        return candidate.id

    def insert_candidate_job_offer(self, candidate_id: int, job_offer_id: int) -> None:
        self.db.add(CandidateJobOffer(candidate_id=candidate_id, job_offer_id=job_offer_id))
        self.db.flush()

    # ------------------------------------------------------------------
    # Paginated read path
    # ------------------------------------------------------------------

    def count_candidates(self) -> int:
        with self._session_factory() as session:
            return session.query(func.count(Candidate.id)).scalar() or 0

    def find_candidates_paginated(self, limit: int, offset: int) -> List[Candidate]:
        """Fetch a page of candidates, oldest first."""
        with self._session_factory() as session:
            return (
                session.query(Candidate)
                .order_by(Candidate.created_at.asc(), Candidate.id.asc())
                .offset(offset)
                .limit(limit)
                .all()
            )
