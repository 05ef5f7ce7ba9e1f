"""表单展示层: 按字段配置渲染记录表单并从提交值回填字段."""

__all__ = ["EntityFormDisplay", "EntityFormDisplayProvider"]

from .display import EntityFormDisplay, EntityFormDisplayProvider
