import pytest

from lsp5_received_assets import (
    IndexedRegistryRead,
    InMemoryKeyValueStore,
)

from .helpers.factories import ASSET_A, ASSET_B, ASSET_C, TYPE_1, TYPE_2, build_store


@pytest.fixture
def empty_store() -> InMemoryKeyValueStore:
    return build_store([])


@pytest.fixture
def three_asset_store() -> InMemoryKeyValueStore:
    """A consistent registry: [A, B, C] at indices 0, 1, 2."""
    return build_store(
        [ASSET_A, ASSET_B, ASSET_C],
        metadata={ASSET_A: (TYPE_1, 0), ASSET_B: (TYPE_2, 1), ASSET_C: (TYPE_1, 2)},
    )


@pytest.fixture
def corrupted_store() -> InMemoryKeyValueStore:
    """[A, B, C] where C's map record claims index 5."""
    return build_store(
        [ASSET_A, ASSET_B, ASSET_C],
        metadata={ASSET_A: (TYPE_1, 0), ASSET_B: (TYPE_2, 1), ASSET_C: (TYPE_1, 5)},
    )


@pytest.fixture
def reader(three_asset_store: InMemoryKeyValueStore) -> IndexedRegistryRead:
    return IndexedRegistryRead(store=three_asset_store)
