import pytest

import cnfl.league_data.config as config_module
from cnfl.league_data.config import load_config


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda: None)
    for name in (
        "CNFL_ADMIN_EMAIL",
        "CNFL_ADMIN_PASSWORD",
        "CNFL_ADMIN_NAME",
        "CNFL_DEBUG",
        "CNFL_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()

    assert config.admin_email == "admin@cnfl.com"
    assert config.admin_password == "password"
    assert config.admin_name == "Admin User"
    assert config.debug is False
    assert config.log_dir is None


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("CNFL_ADMIN_EMAIL", " boss@league.test ")
    monkeypatch.setenv("CNFL_DEBUG", "yes")
    monkeypatch.setenv("CNFL_LOG_DIR", str(tmp_path))

    config = load_config()

    assert config.admin_email == "boss@league.test"
    assert config.debug is True
    assert config.log_dir == str(tmp_path)


@pytest.mark.parametrize(
    "name,value",
    [("CNFL_DEBUG", "maybe"), ("CNFL_ADMIN_EMAIL", "not-an-email")],
)
def test_malformed_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        load_config()
