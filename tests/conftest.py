"""
Herbal Garden Test Fixtures
Shared fixtures for all test modules.
"""

import pytest

from herbal_garden.config.settings import Settings
from herbal_garden.core.dependencies import ServiceContainer
from herbal_garden.garden.settings_store import PlantSettingsStore
from herbal_garden.services.chat_service import RemedyChatService
from herbal_garden.services.identify_service import PlantIdentifyService
from herbal_garden.services.plant_info_service import PlantCatalog, PlantInsightService
from tests.fakes import FakeGenerator, FakeIndex


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast unit tests with no network access")
    config.addinivalue_line("markers", "api: route tests through the FastAPI TestClient")


# ============================================================
# Fixtures
# ============================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        GEMINI_API_KEY="test-gemini-key",
        PINECONE_API_KEY="test-pinecone-key",
        PINECONE_INDEX_HOST="index.test.pinecone.io",
        STRUCTURED_LOGGING=False,
    )


@pytest.fixture
def catalog(settings) -> PlantCatalog:
    return PlantCatalog.from_file(settings.plant_catalog_file_path)


@pytest.fixture
def fake_index() -> FakeIndex:
    return FakeIndex()


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def container(settings, catalog, fake_index, fake_generator) -> ServiceContainer:
    bed_models = {bed_id: entry["model"] for bed_id, entry in catalog.all().items()}
    return ServiceContainer(
        settings=settings,
        catalog=catalog,
        plant_settings=PlantSettingsStore(bed_models),
        chat=RemedyChatService(fake_index, fake_generator, namespace=settings.PINECONE_NAMESPACE, top_k=5),
        identify=PlantIdentifyService(fake_generator, fake_index, settings.PINECONE_SIGHTINGS_NAMESPACE),
        insights=PlantInsightService(fake_generator),
        index=fake_index,
        generator=fake_generator,
    )


@pytest.fixture
def client(container):
    """TestClient over an app wired to fakes."""
    from fastapi.testclient import TestClient

    from herbal_garden.main import create_app

    with TestClient(create_app(container=container)) as test_client:
        yield test_client
