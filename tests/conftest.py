"""Root test configuration: isolate every test from config.yaml and MDSITE_* env vars"""

import pytest

from mdsite.config import Settings


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory with no MDSITE_* overrides."""
    monkeypatch.chdir(tmp_path)
    for name in Settings.model_fields:
        monkeypatch.delenv(f"MDSITE_{name.upper()}", raising=False)
