"""Authorization and content rules shared by the write services."""
from __future__ import annotations

from collections.abc import Iterable

from startup_feed.core.errors import Forbidden, InvalidContent
from startup_feed.core.settings import Settings, settings as default_settings
from startup_feed.models import User

__all__ = ["is_admin", "ensure_can_modify", "ensure_not_banned", "clean_content"]


def is_admin(user: User | None, config: Settings | None = None) -> bool:
    """Return True if `user` is the configured administrator."""
    config = config or default_settings
    return user is not None and user.email.lower() == config.admin_email.lower()


def ensure_can_modify(actor: User, owner_email: str, config: Settings | None = None) -> None:
    """Raise `Forbidden` unless `actor` owns the record or is the admin.

    Emails are compared case-insensitively, as in `is_admin`.
    """
    if actor.email.lower() != owner_email.lower() and not is_admin(actor, config):
        raise Forbidden("Not allowed to delete this item")


def ensure_not_banned(user: User, action: str) -> None:
    """Raise `Forbidden` if `user` is banned from creating content."""
    if user.banned:
        raise Forbidden(f"Your account has been banned. You cannot create {action}.")


def clean_content(
    content: str | None, attachments: Iterable[str] | None, kind: str
) -> tuple[str, list[str]]:
    """Trim the text and drop empty attachments.

    Raises:
        InvalidContent: If nothing remains of either.
    """
    text = (content or "").strip()
    files = [item for item in (attachments or []) if item and item.strip()]
    if not text and not files:
        raise InvalidContent(f"{kind} content or attachments required")
    return text, files
