"""工具模块.

包含各种实用工具和辅助函数,提供通用的功能支持.

主要工具:
- structlog_config: 结构化日志配置
- route_safety: 事务边界与视图异常统一处理
- response_utils: 统一响应封套
- time_utils: 时间处理工具
"""
