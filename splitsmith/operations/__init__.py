"""Operations: administrative rename, delete and key listing."""

from splitsmith.operations.admin import delete, list_keys, rename

__all__ = [
    "list_keys",
    "delete",
    "rename",
]
