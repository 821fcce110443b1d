from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote restaurant_db seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from restaurant_db.app_factory import create_repositories  # noqa: E402
from restaurant_db.core import config as core_config  # noqa: E402
from restaurant_db.seed_data import seed  # noqa: E402


@pytest.fixture()
def repos(tmp_path, monkeypatch):
    """Repositories over a freshly synced temporary SQLite file."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    core_config.get_settings.cache_clear()

    repositories = create_repositories()
    repositories.store.sync(force=True)

    yield repositories

    repositories.close()
    core_config.get_settings.cache_clear()


@pytest.fixture()
def seeded(repos):
    seed(repos)
    return repos
