from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Tuple

import pytest

from dsabot.errors import ExternalServiceError
from dsabot.schemas import ExecutionResult
from dsabot.services.code_runner import CodeRunner
from dsabot.services.command_service import CommandService
from dsabot.services.cooldowns import CooldownTracker
from dsabot.services.interview_service import InterviewService
from dsabot.services.interview_store import InterviewStore


PROBLEM_TEXT = (
	"🚀 TITLE: Two Sum\n"
	"🚀 DIFFICULTY: Easy\n"
	"🚀 STATEMENT:\nGiven an array of integers nums and a target, return indices of the two numbers that add up to target.\n"
	"🚀 CONSTRAINTS:\n- 2 <= nums.length <= 10^4\n"
	"🚀 SAMPLE I/O:\nInput: nums = [2,7,11,15], target = 9\nOutput: [0,1]\n"
)

PASSING_FEEDBACK = (
	"🚀 HEADER: Correctness\nHandles all inputs.\n"
	"🚀 HEADER: Time Complexity\nO(n)\n"
	"🚀 HEADER: Space Complexity\nO(n)\n"
	"🚀 HEADER: Edge Cases\nDuplicates are handled.\n"
	"🚀 HEADER: Optimization Suggestions\nNone needed.\n"
	"🚀 HEADER: Final Verdict\nPASS - clean hash map solution.\n"
)


class FakeLLM:
	model_name = "fake-model"

	def __init__(self) -> None:
		self.fail = False
		self.fail_explain = False
		self.answer = "Use a hash map."
		self.feedback = PASSING_FEEDBACK
		self.hint_calls: List[Tuple[str, int]] = []

	def _check(self) -> None:
		if self.fail:
			raise ExternalServiceError()

	async def answer_question(self, question: str) -> str:
		self._check()
		return self.answer

	async def generate_problem(self) -> str:
		self._check()
		return PROBLEM_TEXT

	async def generate_hint(self, problem_text: str, hints_used: int) -> str:
		self._check()
		self.hint_calls.append((problem_text, hints_used))
		return f"🚀 HINT: Think about complements (hint {hints_used})."

	async def evaluate_solution(self, problem_text: str, code: str) -> str:
		self._check()
		return self.feedback

	async def explain_execution(self, language: str, code: str, result: ExecutionResult) -> str:
		if self.fail or self.fail_explain:
			raise ExternalServiceError()
		return f"The {language} program printed {result.stdout.strip()!r}."


class FakeExecutor:
	def __init__(self) -> None:
		self.calls: List[Tuple[str, str]] = []
		self.result = ExecutionResult(stdout="hi\n", status="Success")
		self.fail = False

	async def execute(self, language: str, source_code: str) -> ExecutionResult:
		self.calls.append((language, source_code))
		if self.fail:
			raise ExternalServiceError(
				"connection refused",
				user_message="Failed to execute code via Wandbox. Please check your internet connection or try again later.",
			)
		return self.result


class FakeClock:
	def __init__(self) -> None:
		self.now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

	def __call__(self) -> datetime:
		return self.now

	def advance(self, **kwargs) -> None:
		self.now += timedelta(**kwargs)


@pytest.fixture
def anyio_backend():
	return "asyncio"


@pytest.fixture
def clock() -> FakeClock:
	return FakeClock()


@pytest.fixture
def store(clock) -> InterviewStore:
	return InterviewStore(clock=clock)


@pytest.fixture
def fake_llm() -> FakeLLM:
	return FakeLLM()


@pytest.fixture
def fake_executor() -> FakeExecutor:
	return FakeExecutor()


@pytest.fixture
def interviews(store, fake_llm) -> InterviewService:
	return InterviewService(store, fake_llm)


@pytest.fixture
def runner(fake_executor, fake_llm) -> CodeRunner:
	return CodeRunner(fake_executor, fake_llm, max_code_length=5000)


@pytest.fixture
def commands(interviews, runner, fake_llm) -> CommandService:
	return CommandService(interviews, runner, fake_llm, CooldownTracker(0), prefix="!")
