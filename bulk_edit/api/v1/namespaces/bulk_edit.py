"""Bulk edit namespace (内容记录批量编辑)."""

from __future__ import annotations

from typing import ClassVar

from flask import request
from flask_login import current_user
from flask_restx import Namespace, fields

from bulk_edit.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from bulk_edit.api.v1.resources.base import BaseResource
from bulk_edit.api.v1.resources.decorators import api_login_required, api_permission_required
from bulk_edit.constants import SuccessMessages, UserRole
from bulk_edit.services.bulk_edit import BulkEditBatchService

ns = Namespace("bulk_edit", description="内容批量编辑")

ErrorEnvelope = get_error_envelope_model(ns)

BulkEditRecordsPayload = ns.model(
    "BulkEditRecordsPayload",
    {
        "record_ids": fields.List(fields.Integer, required=True, description="选中的记录 ID, 按执行顺序"),
    },
)

BulkEditConfigurePayload = ns.inherit(
    "BulkEditConfigurePayload",
    BulkEditRecordsPayload,
    {
        "values": fields.Raw(
            required=True,
            description="表单提交值, 结构与表单树一致",
            example={
                "node": {"page": {"_field_selector": {"title": True}, "title": {"0": {"value": "新标题"}}}},
                "_add_values": False,
            },
        ),
    },
)

BulkEditFormData = ns.model(
    "BulkEditFormData",
    {
        "form": fields.Raw(description="渲染树"),
        "bundles": fields.Raw(description="{type: {bundle: label}}"),
        "record_ids": fields.List(fields.Integer),
    },
)
BulkEditFormSuccessEnvelope = make_success_envelope_model(ns, "BulkEditFormSuccessEnvelope", BulkEditFormData)

BulkEditConfigurationData = ns.model(
    "BulkEditConfigurationData",
    {
        "config_id": fields.Integer(),
        "configuration": fields.Raw(),
        "record_ids": fields.List(fields.Integer),
    },
)
BulkEditConfigurationSuccessEnvelope = make_success_envelope_model(
    ns, "BulkEditConfigurationSuccessEnvelope", BulkEditConfigurationData
)

BulkEditOutcomeModel = ns.model(
    "BulkEditOutcome",
    {
        "record_id": fields.Integer(),
        "status": fields.String(enum=["modified", "skipped", "failed"]),
        "message": fields.String(),
        "changed_fields": fields.List(fields.String),
    },
)

BulkEditExecuteData = ns.model(
    "BulkEditExecuteData",
    {
        "config_id": fields.Integer(),
        "results": fields.List(fields.Nested(BulkEditOutcomeModel)),
        "modified_count": fields.Integer(),
        "skipped_count": fields.Integer(),
        "failed_count": fields.Integer(),
    },
)
BulkEditExecuteSuccessEnvelope = make_success_envelope_model(ns, "BulkEditExecuteSuccessEnvelope", BulkEditExecuteData)


def _actor_id() -> int | None:
    return getattr(current_user, "id", None)


@ns.route("/form")
class BulkEditFormResource(BaseResource):
    """批量编辑表单资源."""

    method_decorators: ClassVar[list] = [api_login_required, api_permission_required(UserRole.PERM_BULK_EDIT)]

    @ns.expect(BulkEditRecordsPayload, validate=False)
    @ns.response(200, "OK", BulkEditFormSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(401, "Unauthorized", ErrorEnvelope)
    @ns.response(403, "Forbidden", ErrorEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def post(self):
        """按选中记录渲染批量编辑表单."""
        payload = request.get_json(silent=True)

        def _execute():
            outcome = BulkEditBatchService().build_form_from_payload(payload)
            return self.success(
                data={
                    "form": outcome.form,
                    "bundles": outcome.bundles,
                    "record_ids": outcome.record_ids,
                },
                message=SuccessMessages.FORM_BUILT,
            )

        return self.safe_call(
            _execute,
            module="bulk_edit",
            action="build_bulk_edit_form",
            public_error="构建批量编辑表单失败",
            context={"endpoint": "bulk_edit.form"},
        )


@ns.route("/configurations")
class BulkEditConfigurationsResource(BaseResource):
    """批量编辑配置资源."""

    method_decorators: ClassVar[list] = [api_login_required, api_permission_required(UserRole.PERM_BULK_EDIT)]

    @ns.expect(BulkEditConfigurePayload, validate=False)
    @ns.response(201, "Created", BulkEditConfigurationSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(401, "Unauthorized", ErrorEnvelope)
    @ns.response(403, "Forbidden", ErrorEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def post(self):
        """提交表单并保存批量编辑配置."""
        payload = request.get_json(silent=True)
        actor_id = _actor_id()

        def _execute():
            outcome = BulkEditBatchService().save_configuration_from_payload(payload, actor_id=actor_id)
            return self.success(
                data={
                    "config_id": outcome.config_id,
                    "configuration": outcome.configuration,
                    "record_ids": outcome.record_ids,
                },
                message=SuccessMessages.CONFIGURATION_SAVED,
                status=201,
            )

        return self.safe_call(
            _execute,
            module="bulk_edit",
            action="save_bulk_edit_configuration",
            public_error="保存批量编辑配置失败",
            context={"endpoint": "bulk_edit.configurations"},
        )


@ns.route("/configurations/<int:config_id>")
class BulkEditConfigurationResource(BaseResource):
    """单个批量编辑配置资源."""

    method_decorators: ClassVar[list] = [api_login_required, api_permission_required(UserRole.PERM_BULK_EDIT)]

    @ns.response(200, "OK", BulkEditConfigurationSuccessEnvelope)
    @ns.response(401, "Unauthorized", ErrorEnvelope)
    @ns.response(403, "Forbidden", ErrorEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def get(self, config_id: int):
        """获取已保存的批量编辑配置."""

        def _execute():
            config = BulkEditBatchService().get_configuration(config_id)
            return self.success(data={"config_id": config.id, "configuration": config.configuration})

        return self.safe_call(
            _execute,
            module="bulk_edit",
            action="get_bulk_edit_configuration",
            public_error="获取批量编辑配置失败",
            context={"endpoint": "bulk_edit.configuration", "config_id": config_id},
        )


@ns.route("/configurations/<int:config_id>/execute")
class BulkEditExecuteResource(BaseResource):
    """批量编辑执行资源."""

    method_decorators: ClassVar[list] = [api_login_required, api_permission_required(UserRole.PERM_BULK_EDIT)]

    @ns.expect(BulkEditRecordsPayload, validate=False)
    @ns.response(200, "OK", BulkEditExecuteSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(401, "Unauthorized", ErrorEnvelope)
    @ns.response(403, "Forbidden", ErrorEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def post(self, config_id: int):
        """对选中记录逐条执行批量编辑配置."""
        payload = request.get_json(silent=True)
        actor_id = _actor_id()

        def _execute():
            outcome = BulkEditBatchService().execute_from_payload(config_id, payload, actor_id=actor_id)
            return self.success(
                data={
                    "config_id": outcome.config_id,
                    "results": outcome.results,
                    "modified_count": outcome.modified_count,
                    "skipped_count": outcome.skipped_count,
                    "failed_count": outcome.failed_count,
                },
                message=SuccessMessages.BULK_EDIT_EXECUTED,
            )

        return self.safe_call(
            _execute,
            module="bulk_edit",
            action="execute_bulk_edit",
            public_error="执行批量编辑失败",
            context={"endpoint": "bulk_edit.execute", "config_id": config_id},
        )
