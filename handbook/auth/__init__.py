from .dependencies import CurrentUserId, ensure_same_user


__all__ = ["CurrentUserId", "ensure_same_user"]
