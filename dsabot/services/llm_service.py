from __future__ import annotations

from typing import Dict, List
import logging

import anyio
from groq import Groq
try:
    import google.generativeai as genai
except Exception:
    genai = None

from dsabot.config import settings
from dsabot.errors import ExternalServiceError
from dsabot.schemas import ExecutionResult


logger = logging.getLogger(__name__)


MENTOR_PROMPT = (
	"Act as a senior FAANG L5 (Software Engineer III) engineer. "
	"Your goal is to help students master Data Structures and Algorithms (DSA).\n\n"

	"Tone: high-agency, professional, slightly sarcastic about slow or brute-force solutions, "
	"deeply constructive and mentoring-oriented, clear, calm and confident.\n\n"

	"STRICT FORMATTING RULES (MANDATORY):\n"
	"- Never use the # character outside code blocks. Never use $ or LaTeX-style math.\n"
	"- Never use markdown headers like ###.\n"
	"- Section titles use exactly this format: 🚀 SECTION NAME\n"
	"- Use inline code for variables, function names and complexity, bold for emphasis, "
	"> blockquotes for mental models.\n"
	"- Use ━━━━━━━━━━━━━━ as the only major separator.\n"
	"- Every code solution is a complete, production-clean C++ implementation inside a ```cpp block, "
	"with meaningful names and short comments.\n\n"

	"REQUIRED RESPONSE STRUCTURE:\n"
	"🚀 INTUITION & APPROACH\n"
	"Start with a strong mental model, explain the core trade-off, call out why brute force is weak.\n\n"
	"💻 OPTIMIZED SOLUTION\n"
	"A clean C++ implementation. No pseudocode, no partial snippets.\n\n"
	"📊 COMPLEXITY ANALYSIS\n"
	"Time: O(...) with one justification sentence. Space: O(...) with one justification sentence.\n\n"
	"⚠️ CRITICAL EDGE CASES\n"
	"3-4 bullets, each naming the edge case and why it matters.\n\n"
	"🎯 FOLLOW-UP INTERVIEW QUESTION\n"
	"Exactly one probing question about trade-offs or system-level thinking.\n"
)

PROBLEM_PROMPT = (
	"You are a FAANG interviewer running a live mock coding interview. "
	"Generate ONE original Data Structures and Algorithms problem of Easy or Medium difficulty.\n\n"
	"Output ONLY the following sections, each starting on its own line with the exact marker shown, "
	"and nothing else (no solution, no hints):\n"
	"🚀 TITLE: <short problem title on one line>\n"
	"🚀 DIFFICULTY: <Easy|Medium|Hard on one line>\n"
	"🚀 STATEMENT:\n<full problem statement>\n"
	"🚀 CONSTRAINTS:\n<bullet list of input constraints>\n"
	"🚀 SAMPLE I/O:\n<one or two examples with Input and Output lines>\n\n"
	"Never use the 🚀 character anywhere else."
)

HINT_PROMPT = (
	"You are a FAANG interviewer giving a candidate a hint during a mock interview. "
	"Hints are progressive: hint 1 nudges towards the right observation, hint 2 names the technique "
	"or data structure, hint 3 and later outline the algorithm step by step. Never reveal full code.\n\n"
	"Output exactly one section:\n"
	"🚀 HINT: <the hint>\n"
	"Never use the 🚀 character anywhere else."
)

EVALUATION_PROMPT = (
	"You are a senior FAANG interviewer evaluating a candidate's solution to the given problem. "
	"Be concrete, honest and constructive.\n\n"
	"Output exactly these six sections in this order, each header on its own line followed by its content:\n"
	"🚀 HEADER: Correctness\n<does it solve the problem, which inputs break it>\n"
	"🚀 HEADER: Time Complexity\n<O(...) with justification>\n"
	"🚀 HEADER: Space Complexity\n<O(...) with justification>\n"
	"🚀 HEADER: Edge Cases\n<handled and missed edge cases>\n"
	"🚀 HEADER: Optimization Suggestions\n<concrete improvements>\n"
	"🚀 HEADER: Final Verdict\n<PASS or NEEDS IMPROVEMENT, then one sentence>\n\n"
	"Never use the 🚀 character anywhere else."
)

EXPLAIN_PROMPT = (
	"You are Zia, a senior engineer reviewing a code execution result. "
	"In under 200 words: explain what the program does, interpret the output or error, "
	"and if it failed, point at the exact cause and the fix. "
	"Use inline code for identifiers. Do not repeat the whole source."
)


class LLMService:
	def __init__(self) -> None:
		self._client: Groq | None = None

	def _ensure_client(self):
		provider = settings.llm_provider
		if provider == "groq":
			api_key = settings.groq_api_key
			if not api_key:
				self._client = None
				return None
			if self._client is None or not isinstance(self._client, Groq):
				self._client = Groq(api_key=api_key)
			return self._client
		elif provider == "gemini":
			if genai is None:
				return None
			api_key = settings.gemini_api_key
			if not api_key:
				return None
			# For gemini we return a configured module handle to keep usage simple
			genai.configure(api_key=api_key)
			return genai
		else:
			return None

	@property
	def enabled(self) -> bool:
		provider = settings.llm_provider
		if provider == "groq":
			return bool(settings.groq_api_key)
		if provider == "gemini":
			return genai is not None and bool(settings.gemini_api_key)
		return False

	@property
	def model_name(self) -> str:
		return settings.groq_model if settings.llm_provider == "groq" else settings.gemini_model

	async def generate(self, system_instruction: str, prompt: str, *, temperature: float | None = None) -> str:
		"""Single-shot completion. Raises ExternalServiceError on any provider failure."""
		client = self._ensure_client()
		provider = settings.llm_provider
		if client is None:
			raise ExternalServiceError(f"LLM provider '{provider}' is not configured")

		messages: List[Dict[str, str]] = [
			{"role": "system", "content": system_instruction},
			{"role": "user", "content": prompt},
		]
		temp = settings.answer_temperature if temperature is None else temperature

		def _call() -> str:
			if provider == "groq":
				resp = client.chat.completions.create(
					model=settings.groq_model,
					messages=messages,
					temperature=temp,
					max_tokens=settings.groq_max_tokens,
				)
				return resp.choices[0].message.content or ""
			gmodel = client.GenerativeModel(settings.gemini_model)
			full_prompt = (system_instruction + "\n\nUser:\n" + prompt).strip()
			resp = gmodel.generate_content(full_prompt, generation_config={"temperature": temp})
			return getattr(resp, "text", None) or (resp.candidates[0].content.parts[0].text if getattr(resp, "candidates", None) else "")

		logger.info("llm request provider=%s prompt=%r", provider, prompt[:50])
		try:
			text = await anyio.to_thread.run_sync(_call)
		except Exception as e:
			logger.exception("llm request failed provider=%s", provider)
			raise ExternalServiceError(f"LLM request failed: {e}") from e
		text = (text or "").strip()
		if not text:
			raise ExternalServiceError("LLM returned an empty response")
		return text

	async def answer_question(self, question: str) -> str:
		return await self.generate(MENTOR_PROMPT, question)

	async def generate_problem(self) -> str:
		return await self.generate(PROBLEM_PROMPT, "Generate a new interview problem now.", temperature=0.9)

	async def generate_hint(self, problem_text: str, hints_used: int) -> str:
		prompt = (
			f"Problem:\n{problem_text}\n\n"
			f"This is hint number {hints_used}. Make it more revealing than hint {hints_used - 1} would be."
		)
		return await self.generate(HINT_PROMPT, prompt)

	async def evaluate_solution(self, problem_text: str, code: str) -> str:
		prompt = f"Problem:\n{problem_text}\n\nCandidate solution:\n```\n{code}\n```"
		return await self.generate(EVALUATION_PROMPT, prompt, temperature=0.2)

	async def explain_execution(self, language: str, code: str, result: ExecutionResult) -> str:
		prompt = (
			f"Language: {language}\n\n"
			f"Code:\n```{language}\n{code}\n```\n\n"
			f"Status: {result.status}\n"
			f"Stdout:\n{result.stdout or '(empty)'}\n"
			f"Stderr:\n{result.stderr or '(empty)'}\n"
			f"Compiler output:\n{result.compile_output or '(empty)'}"
		)
		return await self.generate(EXPLAIN_PROMPT, prompt)


llm_service = LLMService()
