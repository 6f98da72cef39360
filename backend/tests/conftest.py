import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from labelscan import main
from labelscan.services.analyzer import IngredientAnalyzer
from labelscan.services.research.local import LocalResearchProvider


@pytest.fixture(name="analyzer")
def analyzer_fixture():
    return IngredientAnalyzer(research_provider=LocalResearchProvider(), concurrent=False)


@pytest.fixture(name="client")
def client_fixture(monkeypatch):
    monkeypatch.setattr("labelscan.api.analysis.settings.use_llm_research", False)
    return TestClient(main.app)
