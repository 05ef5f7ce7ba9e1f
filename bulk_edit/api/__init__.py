"""批量编辑服务 JSON API (Flask-RESTX) 入口.

版本化接口挂载在 `/api/v1/**`, 见 `bulk_edit.api.v1`.
"""
