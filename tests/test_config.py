"""Tests for site configuration loading."""

import pytest

from energia.config import ConfigError, load_site, load_site_file


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from real env vars, .env files and home config."""
    for var in ("ENERGIA_SITE_NAME", "ENERGIA_AREA_M2", "ENERGIA_PERIOD"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("energia.config.load_dotenv", lambda: None)
    monkeypatch.setattr("energia.config.config_candidates", lambda: [tmp_path / "none.yaml"])


def test_defaults_without_config():
    site = load_site()
    assert site.name == "ENERGIA Analytics"
    assert site.area_m2 is None
    assert site.period is None


def test_yaml_file(tmp_path):
    path = tmp_path / "site.yaml"
    path.write_text("name: Oficina Centro\narea_m2: 120\nperiod: Marzo 2024\n")

    site = load_site(path)

    assert site.name == "Oficina Centro"
    assert site.area_m2 == 120.0
    assert site.period == "Marzo 2024"


def test_precedence(tmp_path, monkeypatch):
    """Test options > environment > YAML."""
    path = tmp_path / "site.yaml"
    path.write_text("name: From YAML\narea_m2: 50\n")
    monkeypatch.setenv("ENERGIA_SITE_NAME", "From Env")
    monkeypatch.setenv("ENERGIA_AREA_M2", "75")

    site = load_site(path)
    assert site.name == "From Env"
    assert site.area_m2 == 75.0

    site = load_site(path, name="From Option", area_m2=90)
    assert site.name == "From Option"
    assert site.area_m2 == 90


def test_invalid_area(tmp_path):
    path = tmp_path / "site.yaml"
    path.write_text("area_m2: large\n")

    with pytest.raises(ConfigError, match="floor area"):
        load_site(path)


def test_non_mapping_yaml(tmp_path):
    path = tmp_path / "site.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigError, match="mapping"):
        load_site_file(path)


def test_empty_yaml_is_defaults(tmp_path):
    path = tmp_path / "site.yaml"
    path.write_text("")
    assert load_site_file(path) == {}


def test_utf8_accented_values(tmp_path):
    """Test that accented names in a UTF-8 file are read correctly."""
    path = tmp_path / "site.yaml"
    path.write_bytes("name: Área Técnica\nperiod: Año 2024\n".encode("utf-8"))

    site = load_site(path)

    assert site.name == "Área Técnica"
    assert site.period == "Año 2024"


def test_non_utf8_file_is_config_error(tmp_path):
    """Test that a Latin-1 encoded file raises ConfigError."""
    path = tmp_path / "site.yaml"
    path.write_bytes("name: Área\n".encode("latin-1"))

    with pytest.raises(ConfigError):
        load_site_file(path)
