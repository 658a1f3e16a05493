from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture()
def bom_path() -> Path:
    return FIXTURES / "bom.xml"
