"""
用户角色常量

定义用户角色和权限，避免魔法字符串。
"""


class UserRole:
    """用户角色常量

    定义系统中的用户角色及其权限。
    """

    # ============================================================================
    # 角色值
    # ============================================================================
    ADMIN = "admin"             # 管理员
    EDITOR = "editor"           # 内容编辑
    VIEWER = "viewer"           # 查看者（只读）

    # 所有角色
    ALL = [ADMIN, EDITOR, VIEWER]

    # ============================================================================
    # 权限定义
    # ============================================================================
    PERM_VIEW = "view"              # 查看权限
    PERM_UPDATE = "update"          # 更新权限
    PERM_BULK_EDIT = "bulk_edit"    # 批量编辑权限

    # 角色权限映射
    PERMISSIONS = {
        ADMIN: [PERM_VIEW, PERM_UPDATE, PERM_BULK_EDIT],
        EDITOR: [PERM_VIEW, PERM_UPDATE, PERM_BULK_EDIT],
        VIEWER: [PERM_VIEW],
    }

    @classmethod
    def has_permission(cls, role: str | None, permission: str) -> bool:
        """判断角色是否具备指定权限."""
        return permission in cls.PERMISSIONS.get(role or "", [])
