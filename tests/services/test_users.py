# tests/services/test_users.py
"""Tests for account registration, login and admin-managed flags."""

import pytest

from startup_feed.core import security
from startup_feed.core.errors import Conflict, InvalidContent, SubjectNotFound, Unauthorized
from startup_feed.models import UserTier
from startup_feed.services import user_service
from startup_feed.services.rules import is_admin


@pytest.mark.asyncio
async def test_register_stores_a_salted_bcrypt_hash(store) -> None:
    user = await user_service.register_user(store, " Ada ", " ada@startup.com ", "hunter2")
    await user_service.register_user(store, "Bob", "bob@startup.com", "hunter2")

    assert (user.name, user.email) == ("Ada", "ada@startup.com")
    assert user.tier is UserTier.NONE
    assert user.verified is False
    users = await store.load_users()
    ada, bob = users["ada@startup.com"], users["bob@startup.com"]
    assert ada.password.startswith("$2b$")
    assert "hunter2" not in ada.password
    assert ada.password != bob.password
    assert security.verify_password("hunter2", ada.password)
    assert not security.verify_password("hunter3", ada.password)


@pytest.mark.asyncio
async def test_register_existing_email_conflicts(store) -> None:
    await user_service.register_user(store, "Ada", "ada@startup.com", "s3cret")

    with pytest.raises(Conflict):
        await user_service.register_user(store, "Imposter", "ada@startup.com", "other")

    assert (await store.load_users())["ada@startup.com"].name == "Ada"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("name", "email", "password"),
    [("", "a@x.io", "pw"), ("A", "  ", "pw"), ("A", "a@x.io", "")],
)
async def test_register_requires_every_field(store, name, email, password) -> None:
    with pytest.raises(InvalidContent):
        await user_service.register_user(store, name, email, password)
    assert await store.load_users() == {}


@pytest.mark.asyncio
async def test_authenticate_checks_the_password(store) -> None:
    await user_service.register_user(store, "Ada", "ada@startup.com", "s3cret")

    user = await user_service.authenticate(store, "ada@startup.com", "s3cret")

    assert user.email == "ada@startup.com"
    with pytest.raises(Unauthorized):
        await user_service.authenticate(store, "ada@startup.com", "wrong")
    with pytest.raises(Unauthorized):
        await user_service.authenticate(store, "nobody@startup.com", "s3cret")


@pytest.mark.asyncio
async def test_list_users_in_registration_order(store, registered_users) -> None:
    users = await user_service.list_users(store)

    assert [u.name for u in users] == ["Author", "Other", "Admin", "Banned"]


@pytest.mark.asyncio
async def test_tier_ban_and_verification_are_persisted(store, registered_users, author) -> None:
    await user_service.set_tier(store, author.email, UserTier.PREMIUM)
    await user_service.set_banned(store, author.email, True)
    await user_service.verify_email(store, author.email, "123456")

    stored = await user_service.get_user(store, author.email)
    assert stored.tier is UserTier.PREMIUM
    assert stored.banned is True
    assert stored.verified is True

    await user_service.set_banned(store, author.email, False)
    assert (await user_service.get_user(store, author.email)).banned is False


@pytest.mark.asyncio
async def test_update_profile_keeps_picture_when_omitted(store, registered_users, author) -> None:
    await user_service.update_profile(store, author.email, "New Name", "https://cdn/p.png")
    user = await user_service.update_profile(store, author.email, "  Newer  ")

    assert user.name == "Newer"
    assert user.profile_picture == "https://cdn/p.png"
    with pytest.raises(InvalidContent):
        await user_service.update_profile(store, author.email, "   ")


@pytest.mark.asyncio
async def test_unknown_user_is_not_found(store) -> None:
    with pytest.raises(SubjectNotFound):
        await user_service.get_user(store, "ghost@startup.com")
    with pytest.raises(SubjectNotFound):
        await user_service.set_banned(store, "ghost@startup.com", True)


def test_admin_is_matched_case_insensitively(test_settings, admin_user, author) -> None:
    admin_user.email = "Admin@Startup.com"

    assert is_admin(admin_user, test_settings) is True
    assert is_admin(author, test_settings) is False


@pytest.mark.asyncio
@pytest.mark.parametrize("code", [None, "", "12345", "1234567"])
async def test_verify_email_requires_a_six_character_code(
    store, registered_users, author, code
) -> None:
    with pytest.raises(InvalidContent):
        await user_service.verify_email(store, author.email, code)

    assert (await user_service.get_user(store, author.email)).verified is False


@pytest.mark.asyncio
async def test_account_without_a_bcrypt_hash_cannot_log_in(store, registered_users, author) -> None:
    # Fixture accounts carry an empty credential.
    with pytest.raises(Unauthorized):
        await user_service.authenticate(store, author.email, "")
