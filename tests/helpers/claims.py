"""Reusable fakes and builders for claim saga tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Literal
from uuid import UUID, uuid4

from listingclaim.config import TenancyConfig
from listingclaim.domain.claiming import (
    AssetIngestor,
    AssetPolicy,
    AssetUpload,
    ClaimLockManager,
    ClaimRecordWriter,
    ClaimSaga,
    ClaimSubmission,
    IdentityProvisioner,
    VerificationGate,
)
from listingclaim.domain.model import (
    AssetKind,
    BusinessListing,
    ClaimRequest,
    ClaimStatus,
    ListingStatus,
    VerificationCode,
    VerificationPurpose,
    VerificationResult,
    check_transition,
)
from listingclaim.domain.ports import (
    ClaimRepositories,
    IdentityAlreadyExists,
    IdentityOutcomeUnknown,
    IdentityProviderError,
    NotificationDeliveryError,
    ObjectStoreError,
    ProviderAccount,
)
from listingclaim.domain.tenancy import TenantResolver

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from listingclaim.domain.model import ClaimSubmitted

BASE_DOMAIN = "example.com"
VALID_CODE = "482913"


def make_listing(
    *,
    tenant: str = "north",
    status: ListingStatus = ListingStatus.UNCLAIMED,
    name: str = "Harbour Cafe",
    listing_id: UUID | None = None,
) -> BusinessListing:
    return BusinessListing(
        id=listing_id or uuid4(),
        tenant=tenant,
        status=status,
        name=name,
        address="1 Quay Street",
        phone="+44 1202 000000",
        website="https://harbour.example.com",
        category="cafe",
    )


def make_code(
    listing_id: UUID,
    *,
    email: str = "owner@example.com",
    code: str = VALID_CODE,
    expires_in: timedelta = timedelta(minutes=15),
) -> VerificationCode:
    return VerificationCode(
        id=uuid4(),
        email=email,
        purpose=VerificationPurpose.BUSINESS_CLAIM,
        code=code,
        listing_id=listing_id,
        expires_at=datetime.now(UTC) + expires_in,
    )


def image(kind: AssetKind, size: int = 1024, *, mime: str = "image/png") -> AssetUpload:
    return AssetUpload(kind=kind, data=b"\x89" * size, mime=mime, filename=f"{kind.value}.png")


def make_submission(
    listing_id: UUID,
    *,
    email: str = "Owner@Example.com ",
    code: str = VALID_CODE,
    overrides: Mapping[str, str | None] | None = None,
    assets: Iterable[AssetUpload] = (),
) -> ClaimSubmission:
    return ClaimSubmission.build(
        email=email,
        password="correct horse battery staple",
        first_name="Ada",
        last_name="Lovelace",
        business_id=str(listing_id),
        verification_code=code,
        website="https://harbour.example.com",
        overrides=overrides,
        assets=assets,
    )


class FakeListingDirectory:
    """In-memory listing store whose conditional writes yield before comparing."""

    def __init__(self, listings: Iterable[BusinessListing] = (), *, fail_revert: bool = False) -> None:
        self.listings: dict[UUID, BusinessListing] = {listing.id: listing for listing in listings}
        self.fail_revert = fail_revert
        self.transitions: list[tuple[UUID, ListingStatus, ListingStatus, int]] = []

    async def get(self, listing_id: UUID) -> BusinessListing | None:
        return self.listings.get(listing_id)

    async def transition_if_equal(
        self, listing_id: UUID, *, expected: ListingStatus, target: ListingStatus
    ) -> int:
        return await self._compare_and_set(listing_id, expected, target)

    async def revert_if_equal(
        self, listing_id: UUID, *, expected: ListingStatus, target: ListingStatus
    ) -> int:
        if self.fail_revert:
            raise ConnectionError("directory unavailable")
        return await self._compare_and_set(listing_id, expected, target)

    async def _compare_and_set(
        self, listing_id: UUID, expected: ListingStatus, target: ListingStatus
    ) -> int:
        check_transition(expected, target)
        await asyncio.sleep(0)
        listing = self.listings.get(listing_id)
        affected = 0
        if listing is not None and listing.status is expected:
            self.listings[listing_id] = replace(listing, status=target)
            affected = 1
        self.transitions.append((listing_id, expected, target, affected))
        return affected

    def status_of(self, listing_id: UUID) -> ListingStatus:
        return self.listings[listing_id].status


class FakeVerificationStore:
    def __init__(self, codes: Iterable[VerificationCode] = (), *, consume_error: bool = False) -> None:
        self.codes: dict[UUID, VerificationCode] = {code.id: code for code in codes}
        self.consume_error = consume_error
        self.consumed: list[UUID] = []

    async def validate(
        self,
        *,
        email: str,
        purpose: VerificationPurpose,
        code: str,
        listing_id: UUID,
    ) -> VerificationResult:
        for record in self.codes.values():
            if (record.email, record.purpose, record.code, record.listing_id) == (
                email,
                purpose,
                code,
                listing_id,
            ):
                if record.is_expired():
                    return VerificationResult(valid=False, expires_at=record.expires_at, reason="code expired")
                return VerificationResult(valid=True, expires_at=record.expires_at, code_id=record.id)
        return VerificationResult.rejected("no matching code")

    async def consume(self, code_id: UUID) -> bool:
        if self.consume_error:
            raise ConnectionError("verification store unavailable")
        self.consumed.append(code_id)
        return self.codes.pop(code_id, None) is not None


class FakeIdentityProvider:
    def __init__(  # noqa: PLR0913
        self,
        *,
        existing: Iterable[str] = (),
        fail: bool = False,
        fail_delete: bool = False,
        delay: float = 0.0,
        error: Exception | None = None,
        lose_response: bool = False,
    ) -> None:
        self.existing = set(existing)
        self.fail = fail
        self.fail_delete = fail_delete
        self.delay = delay
        self.error = error
        self.lose_response = lose_response
        self.accounts: dict[str, tuple[str, dict[str, str]]] = {}
        self.deleted: list[str] = []

    async def create(self, *, email: str, password: str, metadata: Mapping[str, str]) -> str:
        _ = password
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if email in self.existing:
            raise IdentityAlreadyExists("A user with this email address has already been registered")
        if self.fail:
            raise IdentityProviderError("HTTP 500: internal error")
        account_id = f"user-{len(self.accounts) + len(self.deleted) + 1}"
        self.accounts[account_id] = (email, dict(metadata))
        self.existing.add(email)
        if self.lose_response:
            raise IdentityOutcomeUnknown("read timed out")
        return account_id

    async def delete(self, account_id: str) -> None:
        if self.fail_delete:
            raise IdentityProviderError("HTTP 503: unavailable")
        self.deleted.append(account_id)
        email, _ = self.accounts.pop(account_id)
        self.existing.discard(email)

    async def find_by_email(self, email: str) -> ProviderAccount | None:
        for account_id, (account_email, metadata) in self.accounts.items():
            if account_email == email:
                return ProviderAccount(id=account_id, email=account_email, metadata=metadata)
        return None


class FakeObjectStore:
    def __init__(self, *, fail_paths: Iterable[str] = ()) -> None:
        self.fail_paths = set(fail_paths)
        self.objects: dict[str, tuple[bytes, str]] = {}

    async def upload(self, data: bytes, *, mime: str, path: str) -> str:
        if any(path.endswith(suffix) for suffix in self.fail_paths):
            raise ObjectStoreError(f"upload of {path} failed with HTTP 502")
        self.objects[path] = (data, mime)
        return f"https://cdn.example.com/{path}"


class FakeClaimRequestRepository:
    """Committed claims; enforces one pending claim per listing like the partial index."""

    def __init__(self) -> None:
        self.items: list[ClaimRequest] = []

    def add(self, claim: ClaimRequest) -> None:
        if claim.status is ClaimStatus.PENDING and any(
            item.listing_id == claim.listing_id and item.is_open for item in self.items
        ):
            raise RuntimeError("UNIQUE constraint failed: claim_request.listing_id")
        self.items.append(claim)

    async def open_for_listing(self, listing_id: UUID) -> ClaimRequest | None:
        return next((item for item in self.items if item.listing_id == listing_id and item.is_open), None)


class _StagingRepository:
    def __init__(self) -> None:
        self.staged: list[ClaimRequest] = []

    def add(self, claim: ClaimRequest) -> None:
        self.staged.append(claim)

    async def open_for_listing(self, listing_id: UUID) -> ClaimRequest | None:
        _ = listing_id
        return None


class FakeClaimUnitOfWork:
    """Unit of work staging claims until commit."""

    def __init__(
        self,
        repository: FakeClaimRequestRepository,
        *,
        fail_commit: bool = False,
        close_delay: float = 0.0,
    ) -> None:
        self._target = repository
        self.close_delay = close_delay
        self._staging = _StagingRepository()
        self.repositories = ClaimRepositories(claims=self._staging)
        self.fail_commit = fail_commit
        self.committed = False
        self.rollback_called = False

    async def __aenter__(self) -> FakeClaimUnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: object | None,
    ) -> Literal[False]:
        if exc_type is not None:
            await self.rollback()
        # closing a real session awaits the driver
        await asyncio.sleep(self.close_delay)
        return False

    async def commit(self) -> None:
        if self.fail_commit:
            raise ConnectionError("database is locked")
        for claim in self._staging.staged:
            self._target.add(claim)
        self._staging.staged.clear()
        self.committed = True

    async def rollback(self) -> None:
        self._staging.staged.clear()
        self.rollback_called = True


class FakeNotifier:
    def __init__(self, name: str, *, error: Exception | None = None) -> None:
        self.name = name
        self.error = error
        self.events: list[ClaimSubmitted] = []

    async def send(self, event: ClaimSubmitted) -> None:
        if self.error is not None:
            raise self.error
        self.events.append(event)


def failing_notifier(name: str = "email") -> FakeNotifier:
    return FakeNotifier(name, error=NotificationDeliveryError(f"{name} answered HTTP 500"))


@dataclass(slots=True)
class SagaHarness:
    """A ``ClaimSaga`` wired to in-memory fakes, plus handles on every fake."""

    directory: FakeListingDirectory
    verification: FakeVerificationStore
    identity: FakeIdentityProvider = field(default_factory=FakeIdentityProvider)
    store: FakeObjectStore = field(default_factory=FakeObjectStore)
    claims: FakeClaimRequestRepository = field(default_factory=FakeClaimRequestRepository)
    notifiers: Sequence[FakeNotifier] = field(
        default_factory=lambda: [FakeNotifier("email"), FakeNotifier("operator")]
    )
    fail_commit: bool = False
    close_delay: float = 0.0
    deadline_seconds: float = 5.0
    policy: AssetPolicy = field(default_factory=AssetPolicy)
    units_of_work: list[FakeClaimUnitOfWork] = field(default_factory=list)

    def unit_of_work(self) -> FakeClaimUnitOfWork:
        uow = FakeClaimUnitOfWork(
            self.claims, fail_commit=self.fail_commit, close_delay=self.close_delay
        )
        self.units_of_work.append(uow)
        return uow

    @property
    def saga(self) -> ClaimSaga:
        return ClaimSaga(
            tenants=TenantResolver(TenancyConfig(base_domain=BASE_DOMAIN)),
            directory=self.directory,
            verification=VerificationGate(self.verification),
            lock=ClaimLockManager(self.directory),
            identity=IdentityProvisioner(self.identity),
            assets=AssetIngestor(self.store, self.policy),
            records=ClaimRecordWriter(self.unit_of_work),
            notifiers=self.notifiers,
            deadline_seconds=self.deadline_seconds,
        )


def make_harness(
    listing: BusinessListing,
    *,
    codes: Iterable[VerificationCode] | None = None,
    **kwargs: object,
) -> SagaHarness:
    """Harness holding ``listing`` and, by default, one valid code for owner@example.com."""

    directory_kwargs = {"fail_revert": bool(kwargs.pop("fail_revert", False))}
    return SagaHarness(
        directory=FakeListingDirectory([listing], **directory_kwargs),
        verification=FakeVerificationStore(codes if codes is not None else [make_code(listing.id)]),
        **kwargs,  # type: ignore[arg-type]
    )


def host_for(tenant: str) -> str:
    return f"{tenant}.{BASE_DOMAIN}"
