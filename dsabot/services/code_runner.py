from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
import logging

from dsabot.config import settings
from dsabot.errors import ExternalServiceError, InvalidSubmission, UnsupportedLanguage
from dsabot.schemas import ExecutionResult
from dsabot.services.execution_service import ExecutionService, execution_service
from dsabot.services.llm_service import LLMService, llm_service
from dsabot.utils.language_detector import detect
from dsabot.utils.languages import is_supported, normalize_language
from dsabot.utils.source_prep import prepare_source, strip_code_fences


logger = logging.getLogger(__name__)

RUN_USAGE = (
	"Usage: `{prefix}run <language> <code>` or shortcuts like `{prefix}py <code>`\n"
	"Example:\n```\n{prefix}py\nprint(\"Hello\")\n```"
)


@dataclass
class RunOutcome:
	language: str
	detected: bool
	source: str
	result: ExecutionResult
	insight: Optional[str] = None


class CodeRunner:
	def __init__(self, executor: ExecutionService, llm: LLMService, max_code_length: int = 5000) -> None:
		self.executor = executor
		self.llm = llm
		self.max_code_length = max_code_length

	def resolve(self, code: str, language: Optional[str] = None) -> Tuple[str, bool, str]:
		"""Pick the language for ``code``: fence tag, then explicit choice, then detection.

		Returns ``(language, detected, code_without_fences)``.
		"""
		chosen = None
		if language:
			chosen = normalize_language(language)
			if chosen is None:
				raise UnsupportedLanguage(language)
		fence_language, code = strip_code_fences(code)
		if fence_language:
			chosen = fence_language
		if not code:
			raise InvalidSubmission(RUN_USAGE)
		if chosen is None:
			return detect(code), True, code
		return chosen, False, code

	async def run(self, code: str, language: Optional[str] = None, explain: bool = True) -> RunOutcome:
		language, detected, code = self.resolve(code, language)
		if not is_supported(language):
			raise UnsupportedLanguage(language)
		if len(code) > self.max_code_length:
			raise InvalidSubmission(f"Code is too long! Please keep it under {self.max_code_length} characters.")

		source = prepare_source(language, code)
		result = await self.executor.execute(language, source)
		outcome = RunOutcome(language=language, detected=detected, source=source, result=result)

		if explain:
			try:
				outcome.insight = await self.llm.explain_execution(language, source, result)
			except ExternalServiceError:
				logger.warning("execution insight unavailable language=%s", language)
		return outcome


code_runner = CodeRunner(execution_service, llm_service, settings.max_code_length)
