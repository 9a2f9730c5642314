import json
import logging
import os
from pathlib import Path

import pytest

from postalcodes import ConfigurationError, create_postal_code_service
from postalcodes.infrastructure.config import settings

# Fixtures from tests/conftest.py:
# data_dir: Path (romania, united-states and a broken country file)
# isolated_settings: clears POSTALCODES_* env vars and cached config

@pytest.fixture
def service(data_dir: Path, tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return create_postal_code_service(
        default_country="United States",
        directory=str(data_dir),
        config_file=tmp_path / "absent.yaml",
    )

def test_factory_requires_a_country(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ConfigurationError, match="A default country is required."):
        create_postal_code_service(config_file=tmp_path / "absent.yaml")

def test_factory_reads_settings(data_dir: Path, tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        f"data:\n  directory: {data_dir}\n  default_country: romania\ncache:\n  max_size_bytes: 4096\n",
        encoding="utf-8",
    )

    service = create_postal_code_service(config_file=config_file)

    assert service.default_country == "romania"
    assert service.directory == str(data_dir)
    assert service.cache.max_size == 4096

@pytest.mark.asyncio
async def test_end_to_end_queries(service):
    assert await service.get_regions_by_postal_code("90001") == ["California", "Los Angeles"]
    assert await service.get_regions_by_postal_code("37830") is None
    assert await service.validate_postal_code("94101") is True
    assert await service.validate_postal_code("00000") is False
    assert await service.get_all_postal_codes() == ["90001", "90002", "94101", "37830"]
    assert await service.get_postal_codes_by_region("san francisco") == ["94101", "94102"]
    assert await service.get_subregions_of_region("california") == ["Los Angeles", "San Francisco"]
    assert await service.get_region_hierarchy("oak ridge") == ["Tennessee", "Anderson", "Oak Ridge"]
    assert await service.search_regions("an") == ["Los Angeles", "San Francisco", "Anderson"]

@pytest.mark.asyncio
async def test_other_country_with_diacritics(service):
    assert await service.get_region_by_country("bistrita", "romania") == ["420001"]
    assert await service.get_region_hierarchy("Baciu", "romania") == ["cluj", "baciu"]

@pytest.mark.asyncio
async def test_unreadable_countries_give_no_data(service):
    assert await service.get_country("atlantis") is None
    assert await service.get_region_by_country("anything", "broken") is None
    assert await service.validate_postal_code("90001", "atlantis") is False

@pytest.mark.asyncio
async def test_too_deeply_nested_country_file_gives_no_data(service, data_dir: Path):
    depth = 5000
    (data_dir / "deep-postal-codes.json").write_text(
        '{"a":' * depth + "[]" + "}" * depth, encoding="utf-8"
    )

    assert await service.get_country("deep") is None
    assert await service.get_region_by_country("a", "deep") is None
    assert await service.search_regions("a", "deep") is None
    assert len(service.cache) == 0

@pytest.mark.asyncio
async def test_failed_read_is_logged_once_at_error(service, caplog):
    with caplog.at_level(logging.DEBUG, logger="postalcodes"):
        assert await service.get_country("broken") is None

    errors = [record for record in caplog.records if record.levelno >= logging.ERROR]
    assert len(errors) == 1
    assert errors[0].name == "postalcodes.core.services.region_service"
    assert "broken-postal-codes.json" in errors[0].getMessage()

@pytest.mark.asyncio
async def test_cache_reuses_parsed_data_until_file_changes(service, data_dir: Path):
    tree_file = data_dir / "united-states-postal-codes.json"
    os.utime(tree_file, ns=(1_000_000_000, 1_000_000_000))

    first = await service.get_country()
    second = await service.get_country()
    assert second is first
    assert service.cache.stats().hits == 1

    tree_file.write_text(json.dumps({"Nevada": {"Reno": ["89501"]}}), encoding="utf-8")
    os.utime(tree_file, ns=(2_000_000_000, 2_000_000_000))

    assert await service.get_postal_codes_by_region("reno") == ["89501"]
    assert await service.get_region_by_country("california") is None

@pytest.mark.asyncio
async def test_invalidate_country_forces_reread(service, data_dir: Path):
    tree_file = data_dir / "united-states-postal-codes.json"
    os.utime(tree_file, ns=(1_000_000_000, 1_000_000_000))
    await service.get_country()

    # Rewrite but keep the old timestamp: only an explicit invalidation notices.
    tree_file.write_text(json.dumps({"Ohio": {"Akron": ["44301"]}}), encoding="utf-8")
    os.utime(tree_file, ns=(1_000_000_000, 1_000_000_000))
    assert await service.get_region_by_country("akron") is None

    assert service.invalidate_country(kind="postal-codes") == 1
    assert await service.get_region_by_country("akron") == ["44301"]
