import asyncio

import pytest

from dsabot.errors import NoActiveSession, SessionAlreadyActive


pytestmark = pytest.mark.anyio


async def test_create_parses_problem_fields(store):
	await store.create("u1", "🚀 TITLE: Two Sum\n🚀 DIFFICULTY: Easy\n🚀 STATEMENT: find pairs")
	session = await store.get_active("u1")
	assert session.problem_fields.title == "Two Sum"
	assert session.problem_fields.difficulty == "Easy"
	assert session.problem_fields.statement == "find pairs"
	assert session.hints_used == 0
	assert session.attempts == 0


async def test_second_create_fails_without_overwriting(store):
	first = await store.create("u1", "🚀 TITLE: First")
	with pytest.raises(SessionAlreadyActive):
		await store.create("u1", "🚀 TITLE: Second")
	assert (await store.get_active("u1")) is first
	assert first.problem_fields.title == "First"


async def test_concurrent_creates_only_one_succeeds(store):
	results = await asyncio.gather(
		store.create("u1", "🚀 TITLE: A"),
		store.create("u1", "🚀 TITLE: B"),
		return_exceptions=True,
	)
	errors = [r for r in results if isinstance(r, SessionAlreadyActive)]
	assert len(errors) == 1
	assert store.active_count() == 1


async def test_operations_without_session_fail(store):
	with pytest.raises(NoActiveSession):
		await store.record_hint("ghost")
	with pytest.raises(NoActiveSession):
		await store.record_attempt("ghost")
	with pytest.raises(NoActiveSession):
		await store.end("ghost")
	assert await store.get_active("ghost") is None


async def test_counters_increment(store):
	await store.create("u1", "🚀 TITLE: Two Sum")
	for _ in range(3):
		await store.record_hint("u1")
	session = await store.record_attempt("u1")
	assert session.hints_used == 3
	assert session.attempts == 1


async def test_sessions_are_per_user(store):
	await store.create("u1", "🚀 TITLE: A")
	await store.create("u2", "🚀 TITLE: B")
	await store.record_hint("u1")
	assert (await store.get_active("u2")).hints_used == 0


async def test_end_removes_session_and_allows_restart(store, clock):
	await store.create("u1", "🚀 TITLE: Two Sum")
	clock.advance(minutes=12, seconds=59)
	ended = await store.end("u1")
	assert ended.elapsed_minutes(store.now()) == 12
	assert await store.get_active("u1") is None
	assert store.active_count() == 0
	await store.create("u1", "🚀 TITLE: Again")
	assert (await store.get_active("u1")).hints_used == 0
