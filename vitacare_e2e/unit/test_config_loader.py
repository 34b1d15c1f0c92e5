import pytest
import yaml

from vitacare_e2e.ui_testing.framework.config_loader import (
    ConfigLoader,
    ConfigurationError,
    coerce_env_value,
)


@pytest.fixture(autouse=True)
def fresh_loader():
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


def write_config(tmp_path, data):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(data), encoding="utf-8")
    return config_path


def test_env_override_and_defaults(monkeypatch, tmp_path):
    config_path = write_config(
        tmp_path, {"site": {"base_url": "https://vitacare.nop-station.com/"}, "timeouts": {"click": 5000}}
    )

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("site.base_url") == "https://vitacare.nop-station.com/"
    assert loader.get("timeouts.probe", 1000) == 1000

    monkeypatch.setenv("SITE_BASE_URL", "https://staging.example.com/")
    monkeypatch.setenv("TIMEOUTS_CLICK", "7000")
    monkeypatch.setenv("BROWSER_HEADLESS", "false")
    assert loader.get("site.base_url") == "https://staging.example.com/"
    assert loader.get("timeouts.click", 5000) == 7000
    assert loader.get("browser.headless", True) is False


def test_loader_is_a_singleton(tmp_path):
    config_path = write_config(tmp_path, {"site": {"cart_path": "/cart"}})

    assert ConfigLoader(config_path=config_path) is ConfigLoader()


def test_reload_updates_values(tmp_path):
    config_path = write_config(tmp_path, {"settle": {"max_wait": 5000}})
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("settle.max_wait") == 5000

    config_path.write_text(yaml.dump({"settle": {"max_wait": 8000}}), encoding="utf-8")
    loader.reload()
    assert loader.get("settle.max_wait") == 8000


def test_section_and_require(tmp_path):
    config_path = write_config(tmp_path, {"journey": {"city": "Dhaka", "area": ""}})
    loader = ConfigLoader(config_path=config_path)

    assert loader.get_section("journey")["city"] == "Dhaka"
    assert loader.get_section("missing") == {}
    assert loader.require("journey.city") == "Dhaka"
    with pytest.raises(ConfigurationError):
        loader.require("journey.area")


def test_invalid_yaml_raises(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("site: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


def test_missing_file_falls_back_to_defaults(tmp_path):
    loader = ConfigLoader(config_path=tmp_path / "absent.yaml")

    assert loader.get("site.base_url", "fallback") == "fallback"


def test_bundled_config_has_journey_data():
    loader = ConfigLoader()

    assert loader.get_section("journey")["products"]
    assert loader.get("settle.delays", {})["confirm_order"] == 2000


def test_config_path_from_environment(monkeypatch, tmp_path):
    config_path = write_config(tmp_path, {"site": {"base_url": "https://staging.vitacare.test/"}})
    monkeypatch.setenv("VITACARE_CONFIG", str(config_path))

    loader = ConfigLoader()

    assert loader.config_path == config_path
    assert loader.get("site.base_url") == "https://staging.vitacare.test/"


def test_non_mapping_yaml_is_rejected(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


@pytest.mark.parametrize(
    "raw, like, expected",
    [
        ("yes", False, True),
        ("off", True, False),
        ("2500", 1000, 2500),
        ("0.5", 1.0, 0.5),
        ("fast", 1000, "fast"),
        ("firefox", "chromium", "firefox"),
    ],
)
def test_coerce_env_value(raw, like, expected):
    assert coerce_env_value(raw, like) == expected
