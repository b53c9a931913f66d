"""Dependency injection for API routes.

Services are built once in the application lifespan and stored on
``app.state.services``. Tests pass a prebuilt container to
``create_app``.
"""

from typing import Annotated

from fastapi import Depends, Request

from cvdeck.agents.contact_extraction import ContactExtractionAgent
from cvdeck.bootstrap import Services
from cvdeck.config.settings import Settings
from cvdeck.contact.service import ContactService
from cvdeck.profile.service import ProfileService
from cvdeck.providers.llm.executor import LLMExecutor


def get_services(request: Request) -> Services:
    """Get the service container built at startup."""
    return request.app.state.services


ServicesDep = Annotated[Services, Depends(get_services)]


def get_settings(services: ServicesDep) -> Settings:
    return services.settings


def get_profile_service(services: ServicesDep) -> ProfileService:
    return services.profile_service


def get_contact_service(services: ServicesDep) -> ContactService:
    return services.contact_service


def get_chat_executor(services: ServicesDep) -> LLMExecutor:
    return services.chat_executor


def get_extraction_agent(services: ServicesDep) -> ContactExtractionAgent:
    return services.extraction_agent


SettingsDep = Annotated[Settings, Depends(get_settings)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
ContactServiceDep = Annotated[ContactService, Depends(get_contact_service)]
ChatExecutorDep = Annotated[LLMExecutor, Depends(get_chat_executor)]
ExtractionAgentDep = Annotated[ContactExtractionAgent, Depends(get_extraction_agent)]
