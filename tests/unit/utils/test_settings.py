import pytest

from bulk_edit.settings import Settings


@pytest.mark.unit
def test_settings_bulk_edit_defaults(monkeypatch) -> None:
    monkeypatch.delenv("BULK_EDIT_SURFACE", raising=False)

    settings = Settings.load()
    config = settings.to_flask_config()

    assert config["BULK_EDIT_SURFACE"] == "bulk_edit"
    assert config["BULK_EDIT_MAX_RECORDS"] == 500
    assert config["SQLALCHEMY_DATABASE_URI"] == "sqlite:///:memory:"
    assert settings.debug is True


@pytest.mark.unit
def test_settings_rejects_invalid_max_records(monkeypatch) -> None:
    monkeypatch.setenv("BULK_EDIT_MAX_RECORDS", "0")

    with pytest.raises(ValueError, match="BULK_EDIT_MAX_RECORDS"):
        Settings.load()


@pytest.mark.unit
def test_settings_production_requires_secret_key(monkeypatch) -> None:
    monkeypatch.setenv("FLASK_ENV", "production")
    monkeypatch.delenv("SECRET_KEY", raising=False)

    with pytest.raises(ValueError, match="SECRET_KEY"):
        Settings()
