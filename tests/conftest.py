from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def data_dir() -> Path:
    return Path(__file__).parent / "data"


@pytest.fixture
def problems_dir() -> Path:
    return ROOT / "problems"


@pytest.fixture
def configs_dir() -> Path:
    return ROOT / "configs"
