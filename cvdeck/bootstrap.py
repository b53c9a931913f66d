"""Service container for the CV deck API.

Everything with a lifecycle (the database pool, the email client, LLM
executors) is built once here and handed to the components that need
it. The API builds the container in its lifespan:

    services = await build_services(get_settings())
    try:
        ...
    finally:
        await services.aclose()
"""

from dataclasses import dataclass

from cvdeck.agents.contact_extraction import ContactExtractionAgent
from cvdeck.config.settings import Settings
from cvdeck.contact.service import ContactService
from cvdeck.contact.store import ContactStore
from cvdeck.contact.stores.inmemory import InMemoryContactStore
from cvdeck.contact.stores.postgres import PostgresContactStore
from cvdeck.db.pool import PostgresPool
from cvdeck.notifications.email import ResendEmailNotifier, get_email_config
from cvdeck.observability.logging import get_logger
from cvdeck.profile.service import ProfileService
from cvdeck.profile.store import ProfileStore
from cvdeck.profile.stores.inmemory import InMemoryProfileStore
from cvdeck.profile.stores.postgres import PostgresProfileStore
from cvdeck.providers.llm.executor import LLMExecutor, create_executor_from_step_config

logger = get_logger(__name__)


@dataclass
class Services:
    """Long-lived collaborators shared by all requests."""

    settings: Settings
    profile_store: ProfileStore
    contact_store: ContactStore
    profile_service: ProfileService
    contact_service: ContactService
    chat_executor: LLMExecutor
    extraction_agent: ContactExtractionAgent
    notifier: ResendEmailNotifier | None = None
    postgres_pool: PostgresPool | None = None

    async def aclose(self) -> None:
        """Release network resources."""
        if self.notifier is not None:
            await self.notifier.close()
        if self.postgres_pool is not None:
            await self.postgres_pool.close()
        logger.info("services_closed")


async def build_services(settings: Settings) -> Services:
    """Create stores, services and executors from configuration.

    The PostgreSQL pool is only created when a store is configured to
    use it.
    """
    storage = settings.storage
    pool: PostgresPool | None = None
    if "postgres" in (storage.profile, storage.contact):
        pool = PostgresPool(config=storage.postgres)
        await pool.connect()

    profile_store: ProfileStore
    if storage.profile == "postgres":
        profile_store = PostgresProfileStore(pool)
    else:
        profile_store = InMemoryProfileStore()

    contact_store: ContactStore
    if storage.contact == "postgres":
        contact_store = PostgresContactStore(pool)
    else:
        contact_store = InMemoryContactStore()

    email_config = get_email_config(settings)
    notifier = ResendEmailNotifier(email_config) if email_config else None
    if notifier is None:
        logger.info("notification_email_disabled")

    llm = settings.providers.llm
    chat_executor = create_executor_from_step_config(llm.chat, "chat")
    extraction_executor = create_executor_from_step_config(llm.extraction, "contact_extraction")

    logger.info(
        "services_built",
        profile_backend=storage.profile,
        contact_backend=storage.contact,
        chat_model=llm.chat.model,
        extraction_model=llm.extraction.model,
    )

    return Services(
        settings=settings,
        profile_store=profile_store,
        contact_store=contact_store,
        profile_service=ProfileService(profile_store),
        contact_service=ContactService(contact_store, notifier),
        chat_executor=chat_executor,
        extraction_agent=ContactExtractionAgent(extraction_executor),
        notifier=notifier,
        postgres_pool=pool,
    )
