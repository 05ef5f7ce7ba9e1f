import pytest

from bulk_edit import create_app, db
from bulk_edit.errors import NotFoundError, SystemError
from bulk_edit.models import ContentType
from bulk_edit.settings import Settings
from bulk_edit.utils.route_safety import safe_route_call


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    app = create_app(settings=Settings.load())
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


def _add_type(type_id: str) -> str:
    db.session.add(ContentType(id=type_id, label=type_id.title()))
    db.session.flush()
    return type_id


@pytest.mark.unit
def test_safe_route_call_commits_on_success(app) -> None:
    result = safe_route_call(
        lambda: _add_type("node"),
        module="bulk_edit",
        action="save_configuration",
        public_error="保存失败",
    )
    db.session.remove()

    assert result == "node"
    assert db.session.get(ContentType, "node") is not None


@pytest.mark.unit
def test_safe_route_call_reraises_app_error_and_rolls_back(app) -> None:
    def _fail():
        _add_type("node")
        raise NotFoundError("配置不存在")

    with pytest.raises(NotFoundError):
        safe_route_call(_fail, module="bulk_edit", action="get_configuration", public_error="读取失败")

    assert db.session.get(ContentType, "node") is None


@pytest.mark.unit
def test_safe_route_call_wraps_unexpected_error(app) -> None:
    def _fail():
        _add_type("node")
        raise KeyError("boom")

    with pytest.raises(SystemError) as excinfo:
        safe_route_call(
            _fail,
            module="bulk_edit",
            action="execute_bulk_edit",
            public_error="批量编辑执行失败",
            context={"config_id": 7},
            include_actor=False,
        )

    assert str(excinfo.value) == "批量编辑执行失败"
    assert isinstance(excinfo.value.__cause__, KeyError)
    assert db.session.get(ContentType, "node") is None
