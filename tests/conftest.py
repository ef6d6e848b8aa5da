import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add the source root to the Python path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from style_kits.models.template_models import Template, TemplateCatalog

# Test configuration for Style Kits


@pytest.fixture
def sample_templates_data():
    """Raw catalog entries as the library serves them, newest first."""
    return [
        {
            "id": 1,
            "title": "Hero A",
            "type": "hero",
            "tags": ["modern"],
            "popularityIndex": 5,
            "timestamp": 1588291200,
        },
        {
            "id": 2,
            "title": "Hero B",
            "type": "hero",
            "tags": [],
            "popularityIndex": 9,
            "timestamp": 1588204800,
        },
        {
            "id": 3,
            "title": "Pricing Table",
            "type": "block",
            "tags": ["Pricing", "Minimal"],
            "popularityIndex": "7",
            "timestamp": 1588118400,
        },
        {
            "id": 4,
            "title": "Landing Page",
            "type": "page",
            "tags": None,
            "timestamp": 1588032000,
            "is_pro": True,
        },
        {
            "id": 5,
            "title": "Contact Block",
            "type": "block",
            "tags": ["form"],
            "popularityIndex": 7,
            "timestamp": 1587945600,
        },
    ]


@pytest.fixture
def sample_catalog_payload(sample_templates_data):
    """Catalog endpoint response body."""
    return {
        "templates": sample_templates_data,
        "count": len(sample_templates_data),
        "timestamp": 1588300000,
    }


@pytest.fixture
def sample_catalog(sample_catalog_payload):
    """Parsed catalog."""
    return TemplateCatalog.model_validate(sample_catalog_payload)


@pytest.fixture
def two_hero_catalog():
    """The two-template catalog used in the reference example."""
    return TemplateCatalog(
        templates=[
            Template(id=1, title="Hero A", type="hero", tags=["modern"], popularityIndex=5),
            Template(id=2, title="Hero B", type="hero", tags=[], popularityIndex=9),
        ],
        count=2,
        timestamp=1588300000,
    )


@pytest.fixture
def mock_library_client(sample_catalog):
    """Library client double returning the sample catalog."""
    client = MagicMock()
    client.request_template_list = AsyncMock(return_value=sample_catalog)
    client.get_favorites = AsyncMock(return_value=["2", "3"])
    client.mark_favorite = AsyncMock(return_value=["2", "3", "5"])
    return client
