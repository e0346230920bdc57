from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, Optional
import asyncio

from dsabot.errors import NoActiveSession, SessionAlreadyActive
from dsabot.schemas import ProblemFields
from dsabot.utils.sections import parse_problem


def _utcnow() -> datetime:
	return datetime.now(timezone.utc)


@dataclass
class InterviewSession:
	user_id: str
	problem_text: str
	problem_fields: ProblemFields
	hints_used: int = 0
	attempts: int = 0
	start_time: datetime = field(default_factory=_utcnow)

	def elapsed_minutes(self, now: datetime) -> int:
		return max(0, int((now - self.start_time).total_seconds() // 60))


class InterviewStore:
	"""In-memory mock-interview sessions, at most one per user.

	Sessions live for the process lifetime and are only removed by ``end``.
	Every mutation happens under one lock so a check-then-insert on the same
	user cannot interleave with another request.
	"""

	def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
		self._sessions: Dict[str, InterviewSession] = {}
		self._lock = asyncio.Lock()
		self._clock = clock

	def now(self) -> datetime:
		return self._clock()

	async def create(self, user_id: str, problem_text: str) -> InterviewSession:
		async with self._lock:
			if user_id in self._sessions:
				raise SessionAlreadyActive()
			state = InterviewSession(
				user_id=user_id,
				problem_text=problem_text,
				problem_fields=parse_problem(problem_text),
				start_time=self._clock(),
			)
			self._sessions[user_id] = state
			return state

	async def get_active(self, user_id: str) -> Optional[InterviewSession]:
		return self._sessions.get(user_id)

	async def record_hint(self, user_id: str) -> InterviewSession:
		async with self._lock:
			state = self._get_required(user_id)
			state.hints_used += 1
			return state

	async def record_attempt(self, user_id: str) -> InterviewSession:
		async with self._lock:
			state = self._get_required(user_id)
			state.attempts += 1
			return state

	async def end(self, user_id: str) -> InterviewSession:
		async with self._lock:
			state = self._sessions.pop(user_id, None)
			if state is None:
				raise NoActiveSession()
			return state

	def active_count(self) -> int:
		return len(self._sessions)

	def _get_required(self, user_id: str) -> InterviewSession:
		state = self._sessions.get(user_id)
		if state is None:
			raise NoActiveSession()
		return state


interview_store = InterviewStore()
