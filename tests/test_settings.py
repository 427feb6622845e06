"""YAML configuration loading."""

import pytest

from estimator.exceptions import ConfigurationError
from estimator.models import Category, ElementKind
from estimator.settings import DEFAULT_CONFIG_PATH, Settings


def test_bundled_config_loads(monkeypatch):
    monkeypatch.delenv("ESTIMATOR_CONFIG", raising=False)
    settings = Settings.load()

    assert DEFAULT_CONFIG_PATH.exists()
    assert settings.canvas.scale_px_per_m == 50
    assert settings.pricing.quantity_rules[Category.FABRIC] == "fabric.wall_area_margin"
    assert settings.tools.by_variant["mounting_plate:rondo"] is ElementKind.PAIRED_MARKER
    assert {o.id for o in settings.catalog.options} >= {"profile-classic", "plate-rondo"}


def test_partial_file_keeps_defaults(tmp_path):
    path = tmp_path / "estimator.yaml"
    path.write_text(
        "pricing:\n"
        "  fabric_margin_m: 0.2\n"
        "  quantity_rules:\n"
        "    profile: profile.stock_length\n"
        "    fabric: fabric.roll_width\n"
        "    membrane: membrane.area\n"
        "    light: light.count\n"
        "    mounting_plate: mounting_plate.count\n"
        "storage:\n"
        "  backend: file\n"
        "  root: /tmp/estimator\n",
        encoding="utf-8",
    )
    settings = Settings.load(path)

    assert settings.pricing.fabric_margin_m == 0.2
    assert settings.pricing.quantity_rules[Category.MOUNTING_PLATE] == "mounting_plate.count"
    assert settings.storage.backend == "file"
    assert settings.canvas.default_size_px == 800


def test_env_var_selects_file(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("canvas:\n  scale_px_per_m: 100\n", encoding="utf-8")
    monkeypatch.setenv("ESTIMATOR_CONFIG", str(path))
    assert Settings.load().canvas.scale_px_per_m == 100


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert Settings.load(path) == Settings()


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigurationError):
        Settings.load(tmp_path / "nope.yaml")


def test_malformed_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("canvas: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.load(path)


def test_invalid_values(tmp_path):
    path = tmp_path / "invalid.yaml"
    path.write_text("canvas:\n  scale_px_per_m: -5\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.load(path)


def test_bundled_config_seeds_walls(monkeypatch):
    monkeypatch.delenv("ESTIMATOR_CONFIG", raising=False)
    walls = {w.id: w for w in Settings.load().walls}

    assert walls["demo-living-north"].has_dimensions
    assert not walls["demo-bedroom-east"].has_dimensions
