"""Application wiring: builds the claim saga from configuration and adapters."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from listingclaim.adapters.identity import HttpIdentityProvider
from listingclaim.adapters.notifications import build_notifiers
from listingclaim.adapters.object_store import HttpObjectStore
from listingclaim.adapters.sqlalchemy import (
    SqlAlchemyClaimUnitOfWork,
    SqlAlchemyListingDirectory,
    SqlAlchemyVerificationStore,
)
from listingclaim.adapters.sqlalchemy.migrations import upgrade_head
from listingclaim.adapters.sqlalchemy.unit_of_work import configured_engine, startup
from listingclaim.config import (
    get_claim_config,
    get_identity_config,
    get_notification_config,
    get_object_store_config,
    get_tenancy_config,
)
from listingclaim.domain.claiming import (
    AssetIngestor,
    AssetPolicy,
    ClaimLockManager,
    ClaimRecordWriter,
    ClaimSaga,
    IdentityProvisioner,
    VerificationGate,
)
from listingclaim.domain.tenancy import TenantResolver

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from listingclaim.config import (
        ClaimConfig,
        IdentityConfig,
        NotificationConfig,
        ObjectStoreConfig,
        TenancyConfig,
    )

log = getLogger(__name__)


async def build_claim_saga(  # noqa: PLR0913
    *,
    engine: AsyncEngine | None = None,
    tenancy: TenancyConfig | None = None,
    claims: ClaimConfig | None = None,
    identity: IdentityConfig | None = None,
    object_store: ObjectStoreConfig | None = None,
    notifications: NotificationConfig | None = None,
) -> ClaimSaga:
    """Assemble a ``ClaimSaga`` backed by the SQL, identity, upload and notification adapters.

    Any configuration not passed in is read from the environment. The SQLAlchemy
    adapter is started (and the schema migrated) unless it already runs; an
    explicit ``engine`` replaces whatever the adapter was started with.
    """

    if engine is not None and configured_engine() is not engine:
        await startup(engine=engine, migrate=False, force=True)
    resolved_engine = configured_engine() or await startup()
    claim_config = claims or get_claim_config()
    identity_config = identity or get_identity_config()
    directory = SqlAlchemyListingDirectory(resolved_engine)
    notifiers = build_notifiers(notifications or get_notification_config())

    saga = ClaimSaga(
        tenants=TenantResolver(tenancy or get_tenancy_config()),
        directory=directory,
        verification=VerificationGate(SqlAlchemyVerificationStore(resolved_engine)),
        lock=ClaimLockManager(directory),
        identity=IdentityProvisioner(
            HttpIdentityProvider(identity_config), role=identity_config.claimant_role
        ),
        assets=AssetIngestor(
            HttpObjectStore(object_store or get_object_store_config()),
            AssetPolicy.from_config(claim_config),
        ),
        records=ClaimRecordWriter(SqlAlchemyClaimUnitOfWork),
        notifiers=notifiers,
        deadline_seconds=claim_config.deadline_seconds,
    )
    log.info(
        "Claim saga ready: deadline=%ss, notifiers=%s",
        claim_config.deadline_seconds,
        [notifier.name for notifier in notifiers] or "none",
    )
    return saga


async def upgrade_database(*, database_uri: str | None = None, revision: str = "head") -> None:
    log.info("Upgrading database schema to %s", revision)
    await upgrade_head(database_uri=database_uri, revision=revision)
    log.info("Database schema is at %s", revision)
