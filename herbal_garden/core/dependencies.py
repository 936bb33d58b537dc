"""
Core Dependencies Module - Service construction and injection.

Builds the clients and services the routers need from Settings and keeps
them in one ServiceContainer on ``app.state``. Tests hand ``create_app`` a
container of fakes instead.
"""

import logging
from dataclasses import dataclass

import httpx
from fastapi import Request

from herbal_garden.clients.generation import TextGenerator, build_text_generator
from herbal_garden.clients.pinecone import VectorIndexClient
from herbal_garden.config.settings import Settings
from herbal_garden.garden.settings_store import PlantSettingsStore
from herbal_garden.services.chat_service import RemedyChatService
from herbal_garden.services.identify_service import PlantIdentifyService
from herbal_garden.services.plant_info_service import PlantCatalog, PlantInsightService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Everything a request handler may need."""

    settings: Settings
    catalog: PlantCatalog
    plant_settings: PlantSettingsStore
    chat: RemedyChatService
    identify: PlantIdentifyService
    insights: PlantInsightService
    index: VectorIndexClient | None = None
    generator: TextGenerator | None = None

    async def close(self) -> None:
        """Close outbound HTTP clients."""
        if self.generator is not None:
            await self.generator.close()
        if self.index is not None:
            await self.index.close()


def build_container(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> ServiceContainer:
    """
    Construct real clients and services from settings.

    Args:
        settings: Application settings
        transport: Optional httpx transport shared by all outbound clients

    Returns:
        ServiceContainer ready to attach to the app
    """
    index = VectorIndexClient(
        api_key=settings.PINECONE_API_KEY,
        index_name=settings.PINECONE_INDEX_NAME,
        host=settings.PINECONE_INDEX_HOST,
        api_version=settings.PINECONE_API_VERSION,
        control_url=settings.PINECONE_CONTROL_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        max_retries=settings.HTTP_MAX_RETRIES,
        transport=transport,
    )
    generator: TextGenerator = build_text_generator(settings, transport=transport)

    catalog = PlantCatalog.from_file(settings.plant_catalog_file_path)
    bed_models = {bed_id: entry["model"] for bed_id, entry in catalog.all().items()}

    return ServiceContainer(
        settings=settings,
        catalog=catalog,
        plant_settings=PlantSettingsStore(bed_models),
        chat=RemedyChatService(
            index,
            generator,
            namespace=settings.PINECONE_NAMESPACE,
            top_k=settings.SEARCH_TOP_K,
            rerank_model=settings.RERANK_MODEL,
        ),
        identify=PlantIdentifyService(generator, index, settings.PINECONE_SIGHTINGS_NAMESPACE),
        insights=PlantInsightService(generator),
        index=index,
        generator=generator,
    )


def get_container(request: Request) -> ServiceContainer:
    """FastAPI dependency returning the app's service container."""
    return request.app.state.container


def get_app_settings(request: Request) -> Settings:
    return request.app.state.container.settings
