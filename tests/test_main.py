import pytest
from sqlalchemy.exc import OperationalError

from site_backend.config import Settings
from site_backend.main import create_app


def test_unreachable_database_stops_startup(tmp_path):
    settings = Settings(
        database_url=f"sqlite:///{(tmp_path / 'no' / 'such' / 'dir' / 'x.db').as_posix()}",
        jwt_secret="test-secret",
        upload_dir=tmp_path / "uploads",
    )
    with pytest.raises(OperationalError):
        create_app(settings)


def test_app_state_holds_its_own_settings(settings):
    app = create_app(settings)
    assert app.state.settings is settings
    assert app.state.session_factory().bind is app.state.engine
