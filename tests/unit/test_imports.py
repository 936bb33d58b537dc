import importlib

import pytest


@pytest.mark.unit
@pytest.mark.parametrize(
    "module_name",
    [
        "garden_shared.errors",
        "garden_shared.clients",
        "garden_shared.clients.connectors",
        "herbal_garden.main",
        "herbal_garden.ingestion.cli",
        "herbal_garden.routers.garden",
    ],
)
def test_modules_import(module_name):
    importlib.import_module(module_name)
