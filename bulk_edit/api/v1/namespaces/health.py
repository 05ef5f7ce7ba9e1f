"""Health namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from bulk_edit.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from bulk_edit.api.v1.resources.base import BaseResource
from bulk_edit.repositories.health_repository import HealthRepository
from bulk_edit.utils.time_utils import time_utils

ns = Namespace("health", description="健康检查")

PingData = ns.model(
    "HealthPingData",
    {
        "status": fields.String(required=True, description="服务状态", example="ok"),
    },
)
PingSuccessEnvelope = make_success_envelope_model(ns, "HealthPingSuccessEnvelope", PingData)

DatabaseData = ns.model(
    "HealthDatabaseData",
    {
        "status": fields.String(required=True, description="数据库状态", example="connected"),
        "timestamp": fields.String(required=True, description="时间戳(ISO8601)"),
    },
)
DatabaseSuccessEnvelope = make_success_envelope_model(ns, "HealthDatabaseSuccessEnvelope", DatabaseData)
ErrorEnvelope = get_error_envelope_model(ns)


@ns.route("/ping")
class HealthPingResource(BaseResource):
    @ns.response(200, "OK", PingSuccessEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self):
        return self.success({"status": "ok"}, message="健康检查成功")


@ns.route("/database")
class HealthDatabaseResource(BaseResource):
    @ns.response(200, "OK", DatabaseSuccessEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self):
        def _execute():
            HealthRepository.ping_database()
            return self.success(
                {"status": "connected", "timestamp": time_utils.now().isoformat()},
                message="数据库连接正常",
            )

        return self.safe_call(
            _execute,
            module="health",
            action="check_database",
            public_error="数据库健康检查失败",
            include_actor=False,
        )
