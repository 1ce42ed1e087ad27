"""
Test configuration and fixtures for seriesflow
"""
import pytest
import sys
import os
from typing import Any, Callable, Dict, List

# Add project root to Python path for development
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Add src directory to path for imports
src_path = os.path.join(project_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from seriesflow.core.config import clear_config
from seriesflow.core.execution import Diagnostics
from seriesflow.core.utils.logger import get_logger

logger = get_logger(__name__)


# Custom pytest markers
def pytest_configure(config):
    """Configure custom pytest markers"""
    config.addinivalue_line(
        "markers", "slow: mark test as slow"
    )


@pytest.fixture(autouse=True)
def reset_config():
    """Clear the global hook registry around every test"""
    clear_config()
    yield
    clear_config()


@pytest.fixture(scope="function")
def diagnostics():
    """Fresh diagnostics sink for one run"""
    return Diagnostics()


@pytest.fixture
def succeed() -> Callable[[Any], Callable]:
    """Factory for units that immediately report success with a value"""
    def factory(value: Any = None) -> Callable:
        def unit(callback):
            callback(None, value)
        return unit
    return factory


@pytest.fixture
def fail() -> Callable[[Any], Callable]:
    """Factory for units that immediately report an error"""
    def factory(error: Any) -> Callable:
        def unit(callback):
            callback(error)
        return unit
    return factory


@pytest.fixture
def call_log() -> List[str]:
    """Shared list recording the order in which units were invoked"""
    return []


@pytest.fixture
def recording(call_log) -> Callable[[str], Callable]:
    """Factory for units that append their name to call_log and succeed"""
    def factory(name: str) -> Callable:
        def unit(callback):
            call_log.append(name)
            callback(None, name)
        return unit
    return factory


@pytest.fixture(scope="function")
def sample_work_tree(succeed, fail) -> Dict[str, Any]:
    """Sample work tree: a succeeds, b.e fails, b.c succeeds"""
    return {
        "a": succeed("a"),
        "b": {
            "e": fail("e"),
            "c": succeed("c"),
        },
    }
