"""Fixtures for API route tests."""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cvdeck.agents.contact_extraction import ContactExtractionAgent
from cvdeck.api.app import create_app
from cvdeck.bootstrap import Services
from cvdeck.config.settings import Settings
from cvdeck.contact.service import ContactService
from cvdeck.contact.stores.inmemory import InMemoryContactStore
from cvdeck.profile.models import Profile
from cvdeck.profile.service import ProfileService
from cvdeck.profile.stores.inmemory import InMemoryProfileStore
from cvdeck.providers.llm import MockLLMExecutor


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api={"rate_limit": {"enabled": False}},
        persona={"display_name": "Dana"},
        observability={"logging": {"level": "WARNING"}},
    )


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    return InMemoryProfileStore(profile=Profile(name="Dana Levi", title="Engineer"))


@pytest.fixture
def contact_store() -> InMemoryContactStore:
    return InMemoryContactStore()


@pytest.fixture
def notifier() -> AsyncMock:
    mock = AsyncMock()
    mock.send_contact_notification.return_value = "email-id"
    return mock


@pytest.fixture
def chat_executor() -> MockLLMExecutor:
    return MockLLMExecutor(default_response="Hi! I build APIs.", stream_chunk_size=4)


@pytest.fixture
def extraction_executor() -> MockLLMExecutor:
    return MockLLMExecutor(structured_response='{"name": "Dana", "email": null}')


@pytest.fixture
def services(
    settings: Settings,
    profile_store: InMemoryProfileStore,
    contact_store: InMemoryContactStore,
    notifier: AsyncMock,
    chat_executor: MockLLMExecutor,
    extraction_executor: MockLLMExecutor,
) -> Services:
    return Services(
        settings=settings,
        profile_store=profile_store,
        contact_store=contact_store,
        profile_service=ProfileService(profile_store),
        contact_service=ContactService(contact_store, notifier),
        chat_executor=chat_executor,
        extraction_agent=ContactExtractionAgent(extraction_executor),
        notifier=notifier,
    )


@pytest.fixture
def app(settings: Settings, services: Services) -> FastAPI:
    return create_app(settings, services=services)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
