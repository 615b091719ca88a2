"""Shared pytest fixtures for PSYS index tests."""
import pytest

from psys.services.index_service import IndexService


@pytest.fixture
def index_service():
    return IndexService()


@pytest.fixture
def genuine_traits():
    """Self-report from the end-to-end worked example."""
    return [60, 55, 70, 40, 30]


@pytest.fixture
def other_traits():
    """A clearly different perceived profile."""
    return [35, 70, 30, 65, 60]


@pytest.fixture
def neutral_traits():
    return [50, 50, 50, 50, 50]


@pytest.fixture
def uneven_vector8():
    return [50, 90, 50, 50, 10, 50, 70, 50]


@pytest.fixture
def sample_payload(genuine_traits, other_traits):
    """Payload with alternates, history and entropy."""
    return {
        "bf_self": genuine_traits,
        "bf_env": other_traits,
        "bf_s2": [58, 57, 68, 42, 31],
        "bf_s3": [63, 52, 72, 38, 28],
        "entropy_hint": 30,
        "history": [
            {"bf_env": [40, 65, 35, 60, 55]},
            {"bf_env": [38, 68, 32, 63, 58]},
            {"traitEnv": [35, 70, 30, 65, 60]},
        ],
    }
