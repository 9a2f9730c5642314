import json
import os
from pathlib import Path

import pytest

from postalcodes.infrastructure.config import settings

ROMANIA_TREE = {
    "cluj": {
        "baciu": ["407055"],
        "cluj-napoca": ["400001", "400002"],
    },
    "bistrița-năsăud": {
        "bistrița": ["420001"],
    },
}

USA_TREE = {
    "California": {
        "Los Angeles": ["90001", "90002"],
        "San Francisco": {"Downtown": ["94101"], "Outer": ["94102"]},
    },
    "Tennessee": {
        "Anderson": {"Clinton": ["37716"], "Oak Ridge": ["37830"]},
    },
}

USA_LOOKUP = {
    "postalCodeMap": {
        "90001": "los-angeles_1",
        "90002": "los-angeles_1",
        "94101": "san-francisco_1",
        "37830": "missing-region",
    },
    "regions": {
        "los-angeles_1": ["California", "Los Angeles"],
        "san-francisco_1": ["California", "San Francisco", "Downtown"],
    },
}


def write_json(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """A temporary data directory laid out like the real one."""
    base = tmp_path / "data"
    base.mkdir()
    write_json(base / "romania-postal-codes.json", ROMANIA_TREE)
    write_json(base / "united-states-postal-codes.json", USA_TREE)
    write_json(base / "united-states-lookup.json", USA_LOOKUP)
    (base / "broken-postal-codes.json").write_text("{ not json", encoding="utf-8")
    return base


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep tests away from the developer's own config and environment."""
    for key in list(os.environ):
        if key.startswith(settings.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    settings.reset_configuration()
    settings.clear_test_config()
    yield
    settings.reset_configuration()
    settings.clear_test_config()
