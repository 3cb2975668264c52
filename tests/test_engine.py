"""Tests for the relationship resolution engine.

Covers the six operations, their error kinds, and the graph properties
they must hold: friendship symmetry, duplicate rejection, block veto,
common friends as set intersection and mentions always reaching the
recipient list.
"""

import itertools

import pytest
from sqlalchemy import func, select

from app.core.exceptions import ConflictError, InvalidError, NotFoundError
from app.db.models import Relationship
from app.relationship import engine
from app.services.user import create_user, resolve_by_email

from conftest import ACCOUNTS, ALICE, BOB, CAROL, DAVE, ERIN

GHOST = "ghost@x.com"


async def _edge_count(db) -> int:
    return await db.scalar(select(func.count()).select_from(Relationship))


class TestCreateFriend:

    async def test_scenario_befriend_then_repeat(self, db, accounts):
        await engine.create_friend(db, [ALICE, BOB])

        assert await engine.get_friends(db, ALICE) == [BOB]

        with pytest.raises(ConflictError) as exc_info:
            await engine.create_friend(db, [ALICE, BOB])
        assert "friendship already exists" in exc_info.value.message

    async def test_friendship_is_symmetric(self, db, accounts):
        await engine.create_friend(db, [CAROL, DAVE])

        assert CAROL in await engine.get_friends(db, DAVE)
        assert DAVE in await engine.get_friends(db, CAROL)

    async def test_duplicate_rejected_in_reverse_order(self, db, accounts):
        await engine.create_friend(db, [ALICE, BOB])

        with pytest.raises(ConflictError):
            await engine.create_friend(db, [BOB, ALICE])
        assert await _edge_count(db) == 1

    async def test_scenario_block_vetoes_friendship(self, db, accounts):
        await engine.block(db, ALICE, CAROL)

        with pytest.raises(ConflictError) as exc_info:
            await engine.create_friend(db, [ALICE, CAROL])
        assert "blocking" in exc_info.value.message

        with pytest.raises(ConflictError) as exc_info:
            await engine.create_friend(db, [CAROL, ALICE])
        assert "blocking" in exc_info.value.message
        assert exc_info.value.kind == "Block"

    async def test_unknown_email_is_invalid_and_writes_nothing(self, db, accounts):
        with pytest.raises(InvalidError) as exc_info:
            await engine.create_friend(db, [ALICE, GHOST])

        assert exc_info.value.email == GHOST
        assert GHOST in exc_info.value.message
        assert await _edge_count(db) == 0

    async def test_requires_exactly_two_emails(self, db, accounts):
        with pytest.raises(InvalidError):
            await engine.create_friend(db, [ALICE])

    async def test_existing_friendship_survives_later_block(self, db, accounts):
        await engine.create_friend(db, [ALICE, BOB])
        await engine.block(db, ALICE, BOB)

        assert await engine.get_friends(db, ALICE) == [BOB]


class TestGetFriends:

    async def test_no_friends_is_empty_list(self, db, accounts):
        assert await engine.get_friends(db, ERIN) == []

    async def test_unknown_account_is_not_found(self, db, accounts):
        with pytest.raises(NotFoundError) as exc_info:
            await engine.get_friends(db, GHOST)
        assert exc_info.value.email == GHOST

    async def test_subscriptions_are_not_friends(self, db, accounts):
        await engine.subscribe(db, ALICE, BOB)
        assert await engine.get_friends(db, ALICE) == []


class TestGetCommonFriends:

    async def test_common_friends(self, db, accounts):
        await engine.create_friend(db, [ALICE, CAROL])
        await engine.create_friend(db, [BOB, CAROL])
        await engine.create_friend(db, [ALICE, DAVE])

        assert await engine.get_common_friends(db, [ALICE, BOB]) == [CAROL]

    async def test_common_friends_is_set_intersection(self, db, accounts):
        for pair in ([ALICE, CAROL], [BOB, CAROL], [ALICE, DAVE], [BOB, DAVE], [ALICE, ERIN], [BOB, ALICE]):
            await engine.create_friend(db, pair)

        for a, b in itertools.permutations(ACCOUNTS, 2):
            expected = set(await engine.get_friends(db, a)) & set(await engine.get_friends(db, b))
            assert set(await engine.get_common_friends(db, [a, b])) == expected

    async def test_unknown_email_is_invalid(self, db, accounts):
        with pytest.raises(InvalidError):
            await engine.get_common_friends(db, [GHOST, ALICE])


class TestSubscribe:

    async def test_subscribe_then_repeat(self, db, accounts):
        await engine.subscribe(db, DAVE, ALICE)

        with pytest.raises(ConflictError) as exc_info:
            await engine.subscribe(db, DAVE, ALICE)
        assert "subscription already exists" in exc_info.value.message

    async def test_reverse_subscription_is_refused(self, db, accounts):
        await engine.subscribe(db, DAVE, ALICE)

        with pytest.raises(ConflictError):
            await engine.subscribe(db, ALICE, DAVE)

    async def test_unknown_target_is_invalid(self, db, accounts):
        with pytest.raises(InvalidError):
            await engine.subscribe(db, ALICE, GHOST)
        assert await _edge_count(db) == 0


class TestBlock:

    async def test_block_then_repeat(self, db, accounts):
        await engine.block(db, ALICE, BOB)

        with pytest.raises(ConflictError) as exc_info:
            await engine.block(db, ALICE, BOB)
        assert "blocking already exists" in exc_info.value.message

    async def test_reverse_block_is_refused(self, db, accounts):
        await engine.block(db, ALICE, BOB)

        with pytest.raises(ConflictError):
            await engine.block(db, BOB, ALICE)

    async def test_unknown_requestor_is_invalid(self, db, accounts):
        with pytest.raises(InvalidError):
            await engine.block(db, GHOST, ALICE)


class TestGetUpdatableRecipients:

    async def test_scenario_subscriber_also_mentioned_listed_once(self, db, accounts):
        await engine.subscribe(db, DAVE, ALICE)

        recipients = await engine.get_updatable_recipients(db, ALICE, f"hi {DAVE}")

        assert recipients.count(DAVE) == 1

    async def test_scenario_unregistered_mention_fails_whole_call(self, db, accounts):
        await engine.create_friend(db, [ALICE, BOB])

        with pytest.raises(InvalidError) as exc_info:
            await engine.get_updatable_recipients(db, ALICE, f"hello {GHOST} and {CAROL}")
        assert exc_info.value.email == GHOST

    async def test_friends_subscribers_and_mentions(self, db, accounts):
        await engine.create_friend(db, [ALICE, BOB])
        await engine.subscribe(db, CAROL, ALICE)

        recipients = await engine.get_updatable_recipients(db, ALICE, f"see {ERIN}")

        assert recipients == [BOB, CAROL, ERIN]

    async def test_blocked_friend_is_dropped(self, db, accounts):
        await engine.create_friend(db, [ALICE, BOB])
        await engine.create_friend(db, [ALICE, CAROL])
        await engine.block(db, ALICE, BOB)

        assert await engine.get_updatable_recipients(db, ALICE, "no mentions") == [CAROL]

    async def test_blocked_account_still_receives_when_mentioned(self, db, accounts):
        await engine.subscribe(db, DAVE, ALICE)
        await engine.block(db, ALICE, DAVE)

        assert await engine.get_updatable_recipients(db, ALICE, "quiet") == []
        assert await engine.get_updatable_recipients(db, ALICE, f"loud {DAVE}") == [DAVE]

    async def test_recipients_superset_of_registered_mentions(self, db, accounts):
        await engine.block(db, ALICE, BOB)
        await engine.block(db, ALICE, CAROL)
        await engine.create_friend(db, [ALICE, DAVE])

        for mentioned in itertools.combinations([BOB, CAROL, DAVE, ERIN], 2):
            text = "update for " + " and ".join(mentioned)
            recipients = await engine.get_updatable_recipients(db, ALICE, text)
            assert set(mentioned) <= set(recipients)
            assert len(recipients) == len(set(recipients))

    async def test_unknown_sender_is_not_found(self, db, accounts):
        with pytest.raises(NotFoundError):
            await engine.get_updatable_recipients(db, GHOST, f"hi {ALICE}")

    async def test_mention_case_is_normalised(self, db, accounts):
        recipients = await engine.get_updatable_recipients(db, ALICE, "hey Erin@X.com")
        assert recipients == [ERIN]

    async def test_mixed_case_registration_can_be_mentioned(self, db, accounts):
        await create_user(db, "Frank@X.com")

        recipients = await engine.get_updatable_recipients(db, ALICE, "hi Frank@X.com")

        assert recipients == ["frank@x.com"]


class TestUserDirectory:

    async def test_duplicate_registration_conflicts(self, db, accounts):
        with pytest.raises(ConflictError) as exc_info:
            await create_user(db, ALICE)
        assert "user already exists" in exc_info.value.message

    async def test_new_account_has_no_relations(self, db, accounts):
        user = await create_user(db, "frank@x.com")

        assert user.id not in accounts.values()
        assert await engine.get_friends(db, "frank@x.com") == []

    async def test_registration_is_stored_lower_cased(self, db, accounts):
        user = await create_user(db, "  Frank@X.com")

        assert user.email == "frank@x.com"
        assert (await resolve_by_email(db, "FRANK@x.com")).id == user.id
        with pytest.raises(ConflictError):
            await create_user(db, "frank@X.COM")
