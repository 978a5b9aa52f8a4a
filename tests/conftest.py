"""Shared test fixtures."""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from cryptobio.database.supabase_client import get_supabase
from cryptobio.main import app
from cryptobio.modules.profiles.schemas import ProfileCreate
from cryptobio.modules.profiles.service import ProfileService
from cryptobio.modules.wallet.session import WalletError, WalletSession

CREATOR_WALLET = "0xA1a1A1a1a1A1a1a1a1a1A1a1a1a1a1A1a1a1A1a1"
VISITOR_WALLET = "0xB2b2b2B2b2b2b2b2b2b2b2B2b2b2b2b2b2B2b2b2"
PAYOUT_WALLET = "0xC3c3c3c3c3c3c3c3c3c3c3c3c3c3c3c3c3c3c3c3"
BASE_CHAIN_ID = 8453
OTHER_CHAIN_ID = 1

UNIQUE_COLUMNS = ("username", "wallet_address")


class FakeAPIError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FakeResponse:
    def __init__(self, data: Any):
        self.data = data


class FakeQuery:
    """Just enough of the PostgREST builder used by ProfileService."""

    def __init__(self, db: FakeSupabase, table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload: dict | None = None
        self.filters: list[tuple[str, Any]] = []
        self.single_row = False

    def select(self, *columns):
        self.op = "select"
        return self

    def insert(self, payload: dict):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload: dict):
        self.op = "update"
        self.payload = payload
        return self

    def eq(self, column: str, value: Any):
        self.filters.append((column, value))
        return self

    def single(self):
        self.single_row = True
        return self

    def execute(self) -> FakeResponse:
        self.db.calls.append((self.table, self.op, list(self.filters)))
        if self.db.fail:
            raise FakeAPIError("connection refused")
        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            for column in UNIQUE_COLUMNS:
                if any(r.get(column) == self.payload.get(column) for r in rows):
                    raise FakeAPIError(
                        f'duplicate key value violates unique constraint "{self.table}_{column}_key"'
                    )
            now = datetime.now(timezone.utc).isoformat()
            row = {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now, **self.payload}
            rows.append(row)
            return FakeResponse([dict(row)])

        matched = [r for r in rows if all(r.get(c) == v for c, v in self.filters)]
        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(r) for r in matched])

        if self.single_row:
            if len(matched) != 1:
                raise FakeAPIError("JSON object requested, multiple (or no) rows returned")
            return FakeResponse(dict(matched[0]))
        return FakeResponse([dict(r) for r in matched])


class FakeSupabase:
    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.calls: list[tuple] = []
        self.fail = False

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, table: str = "profiles") -> list[dict]:
        return self.tables.get(table, [])


class FakeWallet(WalletSession):
    """In-memory wallet; gates let a test hold the flow mid-transaction."""

    def __init__(
        self,
        address: str | None = VISITOR_WALLET,
        chain_id: int | None = BASE_CHAIN_ID,
        balance: int | None = 100_000_000,
    ):
        self.address = address.lower() if address else None
        self.chain_id = chain_id
        self.balance = balance
        self.switch_error: Exception | None = None
        self.send_error: Exception | None = None
        self.receipt_error: Exception | None = None
        self.receipt_gate: asyncio.Event | None = None
        self.switch_calls: list[int] = []
        self.sent: list[tuple[str, str]] = []
        self.balance_reads = 0

    async def switch_chain(self, chain_id: int) -> None:
        self.switch_calls.append(chain_id)
        if self.switch_error:
            raise self.switch_error
        self.chain_id = chain_id

    async def get_token_balance(self, token_address: str, owner: str) -> int:
        self.balance_reads += 1
        if self.balance is None:
            raise WalletError("balance unavailable")
        return self.balance

    async def send_transaction(self, to: str, data: str) -> str:
        if self.send_error:
            raise self.send_error
        self.sent.append((to, data))
        return "0x" + f"{len(self.sent):064x}"

    async def wait_for_receipt(self, tx_hash: str) -> dict:
        if self.receipt_gate is not None:
            await self.receipt_gate.wait()
        if self.receipt_error:
            raise self.receipt_error
        return {"transactionHash": tx_hash, "status": 1}


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def profile_service(fake_db: FakeSupabase) -> ProfileService:
    return ProfileService(fake_db, table="profiles")


@pytest.fixture
def creator_profile(profile_service: ProfileService):
    """Profile "alex" owned by CREATOR_WALLET with a separate payout wallet."""
    profile, error = profile_service.create_profile(ProfileCreate(
        username="alex",
        wallet_address=CREATOR_WALLET,
        payout_address=PAYOUT_WALLET,
        display_name="Alex Rivera",
        bio="Crypto educator & builder",
        tip_amounts=[5, 10, 25],
    ))
    assert error is None
    return profile


@pytest_asyncio.fixture
async def client(fake_db: FakeSupabase) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app with the store swapped for the fake."""
    app.dependency_overrides[get_supabase] = lambda: fake_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
