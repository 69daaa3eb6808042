import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cadentis.app.dispatch import AnalysisDispatcher
from cadentis.core import DEFAULT_TABLES


HEXAMETER_LINE = "Eddig Itália földjén termettek csak a könyvek"


@pytest.fixture
def dispatcher():
    """Dispatcher bound to the default phonology tables."""

    return AnalysisDispatcher(DEFAULT_TABLES)


@pytest.fixture
def alternate_quatrain():
    return "Hold the cat\nUnder the sun\nA fat\nThe run"
