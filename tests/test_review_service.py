"""
Tests for the review write path, the rating aggregator and user deletion.
"""
from types import SimpleNamespace
from uuid import UUID, uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from watchstore.core.errors import ConflictError, ForbiddenError, NotFoundError
from watchstore.models import Order, Review, User, Watch
from watchstore.services.orders import CreateOrderCommand, OrderService, RequestedItem
from watchstore.services.ratings import RatingAggregator
from watchstore.services.reviews import ReviewService
from watchstore.services.users import UserService


@pytest.fixture
def reviews(db_session: AsyncSession) -> ReviewService:
    return ReviewService(db_session)


async def load_watch(session: AsyncSession, watch_id: UUID) -> Watch:
    return await session.get(Watch, watch_id, populate_existing=True)


class TestReviewWritePath:
    """Tests for creating, updating and deleting reviews."""

    async def test_create_review_updates_rating(
        self,
        reviews: ReviewService,
        db_session: AsyncSession,
        callers: SimpleNamespace,
        seed: SimpleNamespace,
    ):
        review = await reviews.create_review(callers.alice, seed.seamaster.id, 5, "Superb")

        assert review.rating == 5
        assert review.author.name == "Alice"

        watch = await load_watch(db_session, seed.seamaster.id)
        assert watch.average_rating == 5
        assert watch.review_count == 1

    async def test_rating_is_mean_of_all_reviews(
        self,
        reviews: ReviewService,
        db_session: AsyncSession,
        callers: SimpleNamespace,
        seed: SimpleNamespace,
    ):
        await reviews.create_review(callers.alice, seed.seamaster.id, 5)
        await reviews.create_review(callers.bob, seed.seamaster.id, 4)

        watch = await load_watch(db_session, seed.seamaster.id)
        assert watch.average_rating == pytest.approx(4.5)
        assert watch.review_count == 2

    async def test_duplicate_review_conflicts_and_keeps_rating(
        self,
        reviews: ReviewService,
        db_session: AsyncSession,
        callers: SimpleNamespace,
        seed: SimpleNamespace,
    ):
        await reviews.create_review(callers.alice, seed.seamaster.id, 3)

        with pytest.raises(ConflictError):
            await reviews.create_review(callers.alice, seed.seamaster.id, 1)

        watch = await load_watch(db_session, seed.seamaster.id)
        assert watch.average_rating == 3
        assert watch.review_count == 1

    async def test_review_of_missing_watch(
        self,
        reviews: ReviewService,
        callers: SimpleNamespace,
    ):
        with pytest.raises(NotFoundError):
            await reviews.create_review(callers.alice, uuid4(), 4)

    async def test_update_rating_recomputes(
        self,
        reviews: ReviewService,
        db_session: AsyncSession,
        callers: SimpleNamespace,
        seed: SimpleNamespace,
    ):
        review = await reviews.create_review(callers.alice, seed.khaki.id, 2, "Meh")

        updated = await reviews.update_review(callers.alice, review.id, rating=4)

        assert updated.rating == 4
        assert updated.comment == "Meh"
        watch = await load_watch(db_session, seed.khaki.id)
        assert watch.average_rating == 4

    async def test_only_author_may_update(
        self,
        reviews: ReviewService,
        callers: SimpleNamespace,
        seed: SimpleNamespace,
    ):
        review = await reviews.create_review(callers.alice, seed.khaki.id, 2)

        with pytest.raises(ForbiddenError):
            await reviews.update_review(callers.bob, review.id, rating=5)
        with pytest.raises(ForbiddenError):
            await reviews.update_review(callers.admin, review.id, rating=5)

    async def test_delete_last_review_resets_rating(
        self,
        reviews: ReviewService,
        db_session: AsyncSession,
        callers: SimpleNamespace,
        seed: SimpleNamespace,
    ):
        review = await reviews.create_review(callers.alice, seed.daytona.id, 5)

        await reviews.delete_review(callers.alice, review.id)

        watch = await load_watch(db_session, seed.daytona.id)
        assert watch.average_rating == 0
        assert watch.review_count == 0

    async def test_admin_may_delete_stranger_may_not(
        self,
        reviews: ReviewService,
        db_session: AsyncSession,
        callers: SimpleNamespace,
        seed: SimpleNamespace,
    ):
        await reviews.create_review(callers.bob, seed.daytona.id, 1)
        review = await reviews.create_review(callers.alice, seed.daytona.id, 5)

        with pytest.raises(ForbiddenError):
            await reviews.delete_review(callers.bob, review.id)

        await reviews.delete_review(callers.admin, review.id)

        watch = await load_watch(db_session, seed.daytona.id)
        assert watch.average_rating == 1
        assert watch.review_count == 1

    async def test_list_watch_reviews_newest_first(
        self,
        reviews: ReviewService,
        callers: SimpleNamespace,
        seed: SimpleNamespace,
    ):
        first = await reviews.create_review(callers.alice, seed.seamaster.id, 5)
        second = await reviews.create_review(callers.bob, seed.seamaster.id, 3)

        listed = await reviews.list_watch_reviews(seed.seamaster.id)

        assert [r.id for r in listed] == [second.id, first.id]
        assert {r.author.name for r in listed} == {"Alice", "Bob"}


class TestRatingAggregator:
    """Tests for rating recomputation."""

    async def test_recompute_is_idempotent(
        self,
        reviews: ReviewService,
        db_session: AsyncSession,
        callers: SimpleNamespace,
        seed: SimpleNamespace,
    ):
        await reviews.create_review(callers.alice, seed.seamaster.id, 5)
        await reviews.create_review(callers.bob, seed.seamaster.id, 2)
        aggregator = RatingAggregator(db_session)

        first = await aggregator.recompute(seed.seamaster.id)
        second = await aggregator.recompute(seed.seamaster.id)

        assert first == second == (3.5, 2)

    async def test_recompute_without_reviews_writes_zeros(
        self,
        db_session: AsyncSession,
        seed: SimpleNamespace,
    ):
        watch = await load_watch(db_session, seed.khaki.id)
        watch.average_rating = 4.2
        watch.review_count = 7
        await db_session.flush()

        assert await RatingAggregator(db_session).recompute(seed.khaki.id) == (0.0, 0)

        watch = await load_watch(db_session, seed.khaki.id)
        assert watch.average_rating == 0
        assert watch.review_count == 0

    async def test_recompute_leaves_catalog_fields_alone(
        self,
        reviews: ReviewService,
        db_session: AsyncSession,
        callers: SimpleNamespace,
        seed: SimpleNamespace,
    ):
        await reviews.create_review(callers.alice, seed.seamaster.id, 4)

        watch = await load_watch(db_session, seed.seamaster.id)
        assert watch.brand == "Omega"
        assert watch.price == seed.seamaster.price
        assert watch.stock == 10


class TestUserDeletion:
    """Tests for deleting a user and cascading into their reviews."""

    async def test_delete_user_removes_reviews_and_recomputes(
        self,
        reviews: ReviewService,
        db_session: AsyncSession,
        callers: SimpleNamespace,
        seed: SimpleNamespace,
    ):
        await reviews.create_review(callers.alice, seed.seamaster.id, 1)
        await reviews.create_review(callers.alice, seed.khaki.id, 2)
        await reviews.create_review(callers.bob, seed.seamaster.id, 5)

        result = await UserService(db_session).delete_user(seed.alice.id)

        assert result.reviews_deleted == 2
        assert result.watches_recomputed == 2

        remaining = (await db_session.execute(select(Review))).scalars().all()
        assert [r.user_id for r in remaining] == [seed.bob.id]

        seamaster = await load_watch(db_session, seed.seamaster.id)
        khaki = await load_watch(db_session, seed.khaki.id)
        assert (seamaster.average_rating, seamaster.review_count) == (5, 1)
        assert (khaki.average_rating, khaki.review_count) == (0, 0)

        assert await db_session.get(User, seed.alice.id) is None

    async def test_delete_user_keeps_their_orders(
        self,
        db_session: AsyncSession,
        seed: SimpleNamespace,
    ):
        order = await OrderService(db_session).create_order(CreateOrderCommand(
            owner_id=seed.bob.id,
            items=[RequestedItem(watch_id=seed.khaki.id, quantity=1)],
        ))

        await UserService(db_session).delete_user(seed.bob.id)

        reloaded = await db_session.get(Order, order.id, populate_existing=True)
        assert reloaded is not None
        assert reloaded.user_id is None

    async def test_delete_missing_user(self, db_session: AsyncSession):
        with pytest.raises(NotFoundError):
            await UserService(db_session).delete_user(uuid4())

    async def test_list_users(self, db_session: AsyncSession):
        users = await UserService(db_session).list_users()

        assert {u.email for u in users} == {
            "alice@example.com",
            "bob@example.com",
            "admin@example.com",
        }
