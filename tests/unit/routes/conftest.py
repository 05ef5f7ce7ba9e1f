# tests/unit/routes/conftest.py
"""API 契约测试专用 fixtures.

提供 test_client、认证会话与内容种子数据相关的 fixtures。
"""

import pytest

from bulk_edit import create_app, db
from bulk_edit.constants import CARDINALITY_UNLIMITED, UserRole
from bulk_edit.models import ContentBundle, ContentItem, ContentType, FieldConfig, User
from bulk_edit.settings import Settings


@pytest.fixture(scope="function")
def app(monkeypatch):
    """创建测试应用实例并建表."""
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")

    settings = Settings.load()
    app = create_app(settings=settings)
    app.config["TESTING"] = True
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def client(app):
    """创建测试客户端."""
    return app.test_client()


def _login_client(app, *, username: str, role: str):
    with app.app_context():
        user = User(username=username, role=role)
        db.session.add(user)
        db.session.commit()
        user_id = user.id

    client = app.test_client()
    with client.session_transaction() as session:
        session["_user_id"] = str(user_id)
    client.user_id = user_id
    return client


@pytest.fixture(scope="function")
def auth_client(app):
    """创建已认证的编辑者客户端."""
    return _login_client(app, username="test_editor", role=UserRole.EDITOR)


@pytest.fixture(scope="function")
def viewer_client(app):
    """创建只读用户客户端."""
    return _login_client(app, username="test_viewer", role=UserRole.VIEWER)


def _add_field(content_type_id, bundle, field_name, label, **options):
    db.session.add(
        FieldConfig(
            content_type_id=content_type_id,
            bundle=bundle,
            field_name=field_name,
            label=label,
            widget=options.get("widget", "string"),
            cardinality=options.get("cardinality", 1),
            weight=options.get("weight", 0),
            required=options.get("required", False),
            display_configurable=options.get("display_configurable", True),
            form_surfaces=["default", "bulk_edit"],
        ),
    )


@pytest.fixture(scope="function")
def seeded_content(app):
    """两条 page 与一条 article 记录.

    Returns:
        dict: ``{"page_ids": [...], "article_id": int}``.
    """
    with app.app_context():
        node = ContentType(id="node", label="Content", bundle_key="type", revisionable=True)
        node.bundles = [
            ContentBundle(bundle="page", label="Basic page"),
            ContentBundle(bundle="article", label="Article"),
        ]
        db.session.add(node)

        for bundle in ("page", "article"):
            _add_field("node", bundle, "title", "Title", required=True, weight=-5)
            _add_field("node", bundle, "body", "Body", widget="text_long", weight=0)
            _add_field("node", bundle, "tags", "Tags", cardinality=3, weight=5)
            _add_field("node", bundle, "links", "Links", cardinality=CARDINALITY_UNLIMITED, weight=6)
            _add_field(
                "node",
                bundle,
                "revision_log",
                "Revision log message",
                widget="text_long",
                weight=25,
                display_configurable=False,
            )

        pages = [
            ContentItem(
                "node",
                "page",
                {"title": [{"value": f"Page {index}"}], "tags": [{"value": "a"}, {"value": "b"}]},
            )
            for index in (1, 2)
        ]
        article = ContentItem("node", "article", {"title": [{"value": "Article 1"}]})
        db.session.add_all([*pages, article])
        db.session.commit()
        return {"page_ids": [page.id for page in pages], "article_id": article.id}
