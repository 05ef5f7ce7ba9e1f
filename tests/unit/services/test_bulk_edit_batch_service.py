import pytest

from bulk_edit import create_app, db
from bulk_edit.errors import DatabaseError
from bulk_edit.models import BulkEditActionConfig, ContentBundle, ContentItem, ContentType
from bulk_edit.repositories import ContentRepository
from bulk_edit.services.bulk_edit.batch_service import BulkEditBatchService
from bulk_edit.services.bulk_edit.executor import ExecutionOutcome
from bulk_edit.settings import Settings


@pytest.fixture
def app():
    app = create_app(settings=Settings.load())
    app.config["TESTING"] = True
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


class _FlakyAction:
    """第二条记录保存失败的动作."""

    def __init__(self, configuration=None) -> None:
        self.configuration = configuration
        self.calls: list[int] = []

    def execute(self, record):
        self.calls.append(record.id)
        if len(self.calls) == 2:
            raise DatabaseError(message_key="DATABASE_SAVE_ERROR")
        return ExecutionOutcome(record_id=record.id, status="modified", message="Modify field values")


def _seed() -> list[int]:
    node = ContentType(id="node", label="Content", bundle_key="type", revisionable=True)
    node.bundles = [ContentBundle(bundle="page", label="Basic page")]
    db.session.add(node)
    items = [ContentItem("node", "page", {"title": [{"value": f"Page {index}"}]}) for index in range(3)]
    db.session.add_all(items)
    db.session.commit()
    return [item.id for item in items]


@pytest.mark.unit
def test_execute_continues_after_record_failure(app) -> None:
    record_ids = _seed()
    config = BulkEditActionConfig(configuration={"_add_values": False})
    db.session.add(config)
    db.session.commit()

    actions: list[_FlakyAction] = []

    def _factory(configuration):
        action = _FlakyAction(configuration)
        actions.append(action)
        return action

    outcome = BulkEditBatchService(action_factory=_factory).execute(
        config.id,
        [record_ids[0], 999, record_ids[1], record_ids[2]],
        actor_id=None,
    )

    assert [item["status"] for item in outcome.results] == ["modified", "failed", "failed", "modified"]
    assert outcome.results[1]["record_id"] == 999
    assert outcome.modified_count == 2
    assert outcome.failed_count == 2
    assert actions[0].calls == [record_ids[0], record_ids[1], record_ids[2]]


@pytest.mark.unit
def test_bundle_data_for_keeps_first_seen_order(app) -> None:
    record_ids = _seed()
    records = ContentRepository().list_by_ids(list(reversed(record_ids)))

    assert BulkEditBatchService().bundle_data_for(records) == {"node": {"page": "Basic page"}}
    assert [record.id for record in records] == list(reversed(record_ids))
