"""统一时间处理工具模块."""

from datetime import UTC, datetime


class TimeUtils:
    """统一时间处理工具类.

    作为批量编辑执行时的时钟来源, 测试中可以替换为固定时钟.
    """

    @staticmethod
    def now() -> datetime:
        """获取当前 UTC 时间."""
        return datetime.now(UTC)

    @staticmethod
    def timestamp() -> int:
        """获取当前 UNIX 时间戳(秒)."""
        return int(datetime.now(UTC).timestamp())


time_utils = TimeUtils()
