from __future__ import annotations

from dataclasses import dataclass
import logging

from dsabot.errors import InvalidSubmission, NoActiveSession, SessionAlreadyActive
from dsabot.schemas import FeedbackFields
from dsabot.services.interview_store import InterviewSession, InterviewStore, interview_store
from dsabot.services.llm_service import LLMService, llm_service
from dsabot.utils.sections import is_passing, parse_feedback, parse_hint
from dsabot.utils.source_prep import strip_all_fences


logger = logging.getLogger(__name__)


@dataclass
class HintOutcome:
	session: InterviewSession
	hint: str


@dataclass
class FeedbackOutcome:
	session: InterviewSession
	fields: FeedbackFields
	passed: bool
	raw: str


@dataclass
class EndOutcome:
	session: InterviewSession
	duration_minutes: int


class InterviewService:
	"""Mock-interview flow: store lookups around one LLM call per step."""

	def __init__(self, store: InterviewStore, llm: LLMService) -> None:
		self.store = store
		self.llm = llm

	async def start(self, user_id: str) -> InterviewSession:
		# Checked up front so a duplicate start does not cost a generation;
		# create() re-checks under the store lock.
		if await self.store.get_active(user_id) is not None:
			raise SessionAlreadyActive()
		problem_text = await self.llm.generate_problem()
		session = await self.store.create(user_id, problem_text)
		logger.info("interview started user=%s title=%r", user_id, session.problem_fields.title)
		return session

	async def hint(self, user_id: str) -> HintOutcome:
		session = await self.store.record_hint(user_id)
		raw = await self.llm.generate_hint(session.problem_text, session.hints_used)
		return HintOutcome(session=session, hint=parse_hint(raw))

	async def answer(self, user_id: str, code: str) -> FeedbackOutcome:
		if await self.store.get_active(user_id) is None:
			raise NoActiveSession()
		cleaned = strip_all_fences(code)
		if not cleaned:
			raise InvalidSubmission("Please provide your code solution. Usage: `{prefix}interview answer <code>`")
		session = await self.store.record_attempt(user_id)
		raw = await self.llm.evaluate_solution(session.problem_text, cleaned)
		fields = parse_feedback(raw)
		passed = is_passing(raw, fields)
		logger.info("interview attempt user=%s attempt=%d passed=%s", user_id, session.attempts, passed)
		return FeedbackOutcome(session=session, fields=fields, passed=passed, raw=raw)

	async def end(self, user_id: str) -> EndOutcome:
		session = await self.store.end(user_id)
		minutes = session.elapsed_minutes(self.store.now())
		logger.info("interview ended user=%s minutes=%d hints=%d attempts=%d", user_id, minutes, session.hints_used, session.attempts)
		return EndOutcome(session=session, duration_minutes=minutes)


interview_service = InterviewService(interview_store, llm_service)
