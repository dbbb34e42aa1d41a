"""Tests for the in-memory stores, progress writer and book provider."""

import asyncio
from datetime import date, datetime

import pytest

from reading_plans.domain.entities import BookMetadata, PlanPatch, PlanStatus, ReadingPlan, ReadingSession
from reading_plans.infrastructure.local_book_provider import LocalBookProvider
from reading_plans.infrastructure.local_plan_store import LocalPlanStore
from reading_plans.infrastructure.local_progress_writer import LocalProgressWriter
from reading_plans.infrastructure.local_session_store import LocalSessionStore


def make_plan(user_id: str = "user-1", **overrides) -> ReadingPlan:
    fields = dict(
        user_id=user_id,
        book_id="dune",
        title="Plan for Dune",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 17),
        daily_goal=25,
        total_pages=412,
    )
    fields.update(overrides)
    return ReadingPlan(**fields)


class TestLocalPlanStore:
    """Test cases for LocalPlanStore."""
    
    @pytest.mark.asyncio
    async def test_create_assigns_id(self):
        store = LocalPlanStore()
        
        first = await store.create_plan(make_plan())
        second = await store.create_plan(make_plan())
        
        assert first.id and second.id
        assert first.id != second.id
        assert await store.get_plan(first.id) == first
    
    @pytest.mark.asyncio
    async def test_get_missing_plan(self):
        with pytest.raises(ValueError, match="not found"):
            await LocalPlanStore().get_plan("missing")
    
    @pytest.mark.asyncio
    async def test_update_applies_deltas(self):
        store = LocalPlanStore()
        plan = await store.create_plan(make_plan())
        read_at = datetime(2024, 1, 2, 20, 0, 0)
        
        await store.update_plan(plan.id, PlanPatch(pages_delta=30, minutes_delta=40, last_read_at=read_at))
        updated = await store.update_plan(plan.id, PlanPatch(pages_delta=10, minutes_delta=5))
        
        assert updated.current_page == 40
        assert updated.minutes_spent == 45
        assert updated.status == PlanStatus.ACTIVE
        # not set on the second patch, so kept
        assert updated.last_read_at == read_at
    
    @pytest.mark.asyncio
    async def test_update_keeps_status(self):
        store = LocalPlanStore()
        plan = await store.create_plan(make_plan(status=PlanStatus.PAUSED))
        
        updated = await store.update_plan(plan.id, PlanPatch(pages_delta=5))
        
        assert updated.status == PlanStatus.PAUSED
    
    @pytest.mark.asyncio
    async def test_transition_status(self):
        store = LocalPlanStore()
        plan = await store.create_plan(make_plan())
        
        updated = await store.transition_status(plan.id, PlanStatus.ACTIVE, PlanStatus.COMPLETED)
        
        assert updated.status == PlanStatus.COMPLETED
        assert (await store.get_plan(plan.id)).status == PlanStatus.COMPLETED
    
    @pytest.mark.asyncio
    async def test_transition_status_only_from_expected(self):
        """Test that the status is left alone when it is not the expected one."""
        store = LocalPlanStore()
        plan = await store.create_plan(make_plan(status=PlanStatus.PAUSED))
        
        assert await store.transition_status(plan.id, PlanStatus.ACTIVE, PlanStatus.COMPLETED) is None
        assert await store.transition_status("missing", PlanStatus.ACTIVE, PlanStatus.COMPLETED) is None
        assert (await store.get_plan(plan.id)).status == PlanStatus.PAUSED
    
    @pytest.mark.asyncio
    async def test_concurrent_transitions_succeed_once(self):
        store = LocalPlanStore()
        plan = await store.create_plan(make_plan())
        
        results = await asyncio.gather(*[
            store.transition_status(plan.id, PlanStatus.ACTIVE, PlanStatus.COMPLETED)
            for _ in range(5)
        ])
        
        assert sum(result is not None for result in results) == 1
    
    @pytest.mark.asyncio
    async def test_update_missing_plan(self):
        with pytest.raises(ValueError):
            await LocalPlanStore().update_plan("missing", PlanPatch(pages_delta=1))
    
    @pytest.mark.asyncio
    async def test_concurrent_updates_are_additive(self):
        store = LocalPlanStore()
        plan = await store.create_plan(make_plan())
        
        await asyncio.gather(*[store.update_plan(plan.id, PlanPatch(pages_delta=3)) for _ in range(20)])
        
        assert (await store.get_plan(plan.id)).current_page == 60
    
    @pytest.mark.asyncio
    async def test_list_plans_by_user(self):
        store = LocalPlanStore()
        newer = await store.create_plan(make_plan(created_at=datetime(2024, 2, 1)))
        older = await store.create_plan(make_plan(created_at=datetime(2024, 1, 1)))
        await store.create_plan(make_plan(user_id="user-2"))
        
        plans = await store.list_plans("user-1")
        
        assert [plan.id for plan in plans] == [older.id, newer.id]


class TestLocalSessionStore:
    """Test cases for LocalSessionStore."""
    
    @pytest.mark.asyncio
    async def test_append_and_filter(self):
        store = LocalSessionStore()
        on_plan = await store.append_session(
            ReadingSession(user_id="user-1", book_id="dune", plan_id="plan-1", pages_read=10)
        )
        free = await store.append_session(ReadingSession(user_id="user-1", book_id="dune", pages_read=4))
        other = await store.append_session(
            ReadingSession(user_id="user-2", book_id="dune", plan_id="plan-1", pages_read=6)
        )
        
        assert await store.list_sessions() == [on_plan, free, other]
        assert await store.list_sessions(plan_id="plan-1") == [on_plan, other]
        assert await store.list_sessions(user_id="user-1") == [on_plan, free]
        assert await store.list_sessions(plan_id="plan-1", user_id="user-2") == [other]
    
    @pytest.mark.asyncio
    async def test_sessions_are_never_overwritten(self):
        store = LocalSessionStore()
        session = ReadingSession(book_id="dune", pages_read=10)
        await store.append_session(session)
        
        with pytest.raises(ValueError, match="already exists"):
            await store.append_session(session)
        assert len(await store.list_sessions()) == 1
    
    @pytest.mark.asyncio
    async def test_discard_session(self):
        store = LocalSessionStore()
        kept = await store.append_session(ReadingSession(book_id="dune", pages_read=10))
        dropped = await store.append_session(ReadingSession(book_id="dune", pages_read=5))
        
        store.discard_session(dropped.id)
        
        assert await store.list_sessions() == [kept]


class TestLocalBookProvider:
    """Test cases for LocalBookProvider."""
    
    def test_sample_books(self):
        provider = LocalBookProvider()
        
        assert provider.get_total_pages("dune") == 412
        assert provider.get_total_pages("untitled-manuscript") == 0
    
    def test_add_book(self):
        provider = LocalBookProvider()
        provider.add_book(BookMetadata(book_id="new", title="New Book", total_pages=99))
        
        assert provider.get_book_metadata("new").title == "New Book"
        assert provider.get_total_pages("new") == 99
    
    def test_missing_book(self):
        with pytest.raises(ValueError, match="Book with id nope not found"):
            LocalBookProvider().get_total_pages("nope")


class FailingPlanStore(LocalPlanStore):
    """Plan store whose updates always fail."""
    
    async def update_plan(self, plan_id, patch):
        raise RuntimeError("plan table unavailable")


class FailingSessionStore(LocalSessionStore):
    """Session store whose appends always fail."""
    
    async def append_session(self, session):
        raise RuntimeError("session table unavailable")


class TestLocalProgressWriter:
    """Test cases for LocalProgressWriter."""
    
    @pytest.mark.asyncio
    async def test_writes_session_and_progress(self):
        plan_store, session_store = LocalPlanStore(), LocalSessionStore()
        writer = LocalProgressWriter(plan_store, session_store)
        plan = await plan_store.create_plan(make_plan())
        session = ReadingSession(book_id="dune", plan_id=plan.id, pages_read=12)
        
        updated = await writer.write_progress(plan.id, PlanPatch(pages_delta=12), session)
        
        assert updated.current_page == 12
        assert await session_store.list_sessions(plan_id=plan.id) == [session]
    
    @pytest.mark.asyncio
    async def test_failed_plan_update_discards_session(self):
        """Test that neither write survives when the plan update fails."""
        session_store = LocalSessionStore()
        plan_store = FailingPlanStore()
        writer = LocalProgressWriter(plan_store, session_store)
        plan = await plan_store.create_plan(make_plan())
        
        with pytest.raises(RuntimeError):
            await writer.write_progress(
                plan.id, PlanPatch(pages_delta=12), ReadingSession(book_id="dune", pages_read=12)
            )
        
        assert await session_store.list_sessions() == []
    
    @pytest.mark.asyncio
    async def test_failed_session_append_leaves_plan(self):
        """Test that the plan is untouched when the session cannot be stored."""
        plan_store = LocalPlanStore()
        writer = LocalProgressWriter(plan_store, FailingSessionStore())
        plan = await plan_store.create_plan(make_plan())
        
        with pytest.raises(RuntimeError):
            await writer.write_progress(
                plan.id, PlanPatch(pages_delta=12), ReadingSession(book_id="dune", pages_read=12)
            )
        
        assert (await plan_store.get_plan(plan.id)).current_page == 0
    
    @pytest.mark.asyncio
    async def test_missing_plan(self):
        session_store = LocalSessionStore()
        writer = LocalProgressWriter(LocalPlanStore(), session_store)
        
        with pytest.raises(ValueError):
            await writer.write_progress(
                "missing", PlanPatch(pages_delta=1), ReadingSession(book_id="dune", pages_read=1)
            )
        
        assert await session_store.list_sessions() == []
