from __future__ import annotations

from typing import Awaitable, Callable, Dict, Optional, Tuple
import logging
import re

from dsabot.config import settings
from dsabot.errors import BotError
from dsabot.schemas import CommandReply
from dsabot.services.code_runner import CodeRunner, code_runner
from dsabot.services.cooldowns import CooldownTracker
from dsabot.services.interview_service import InterviewService, interview_service
from dsabot.services.llm_service import LLMService, llm_service
from dsabot.utils import embeds
from dsabot.utils.audit import JsonlAuditor, auditor
from dsabot.utils.languages import normalize_language
from dsabot.utils.source_prep import split_message


logger = logging.getLogger(__name__)

MESSAGE_LIMIT = 2000
CHUNK_SIZE = 1900

GENERIC_ERROR = "There was an error trying to execute that command!"

# Shortcut commands that also pick the language
RUN_ALIASES: Dict[str, str] = {
	"py": "python",
	"python": "python",
	"cpp": "cpp",
	"java": "java",
}

HELP_TEXT = (
	"**🚀 ZIA - FAANG L5 DSA ASSISTANT**\n"
	"━━━━━━━━━━━━━━\n"
	"I am Zia, your Senior FAANG Engineer (L5). I'm here to provide professional, optimized, "
	"and strictly constructive Data Structures & Algorithms guidance.\n\n"
	"**Available Commands:**\n"
	"• `{p}ask <problem>` - Get a senior-level breakdown of any DSA problem or concept.\n"
	"• `{p}run [cpp|java|python] <code>` - Execute code (language is detected when omitted). "
	"Shortcuts: `{p}py`, `{p}cpp`, `{p}java`.\n"
	"• `{p}interview start` - Start a mock DSA interview.\n"
	"• `{p}interview hint` - Get a progressively deeper hint.\n"
	"• `{p}interview answer <code>` - Submit your solution for evaluation.\n"
	"• `{p}interview end` - End the session and see your stats.\n"
	"• `{p}help` - Show this manual.\n\n"
	"**How I Communicate:**\n"
	"> I prioritize intuition and trade-offs. No brute-force, no filler.\n"
	"> Expect production-ready C++ code and rigorous complexity analysis.\n\n"
	"**Example Usage:**\n"
	"`{p}ask explain the sliding window technique`\n"
	"━━━━━━━━━━━━━━\n"
	"*Tip: Don't ask for the \"easiest\" way. Ask for the \"best\" way.*"
)

_FIRST_TOKEN = re.compile(r"\s*(\S+)")


def _split_first(text: str) -> Tuple[str, str]:
	"""Split off the first whitespace-delimited token, keeping the rest verbatim (newlines included)."""
	match = _FIRST_TOKEN.match(text)
	if not match:
		return "", ""
	return match.group(1), text[match.end():]


Handler = Callable[[str, str, str], Awaitable[CommandReply]]


class CommandService:
	"""Parses prefix commands (``!run``, ``!interview start``, ...) and turns outcomes into replies.

	This is the error boundary for chat messages: every BotError becomes its
	user message, anything else is logged and answered with a generic reply.
	"""

	def __init__(
		self,
		interviews: InterviewService,
		runner: CodeRunner,
		llm: LLMService,
		cooldowns: CooldownTracker,
		prefix: str = "!",
		audit: Optional[JsonlAuditor] = None,
	) -> None:
		self.interviews = interviews
		self.runner = runner
		self.llm = llm
		self.cooldowns = cooldowns
		self.prefix = prefix
		self.audit = audit
		self._handlers: Dict[str, Handler] = {
			"ask": self._ask,
			"run": self._run,
			"interview": self._interview,
			"help": self._help,
		}

	def parse(self, content: str) -> Optional[Tuple[str, str, str]]:
		"""Return ``(canonical_command, invoked_name, rest)`` or None if this is not a known command."""
		if not content or not content.startswith(self.prefix):
			return None
		name, rest = _split_first(content[len(self.prefix):])
		name = name.lower()
		if not name:
			return None
		canonical = "run" if name in RUN_ALIASES else name
		if canonical not in self._handlers:
			return None
		return canonical, name, rest

	async def handle(self, user_id: str, content: str) -> Optional[CommandReply]:
		parsed = self.parse(content)
		if parsed is None:
			return None
		command, invoked, rest = parsed

		wait = self.cooldowns.hit(command, user_id)
		if wait > 0:
			return CommandReply(messages=[f"Please wait {wait:.1f} more second(s) before using the `{command}` command."])

		error: Optional[str] = None
		try:
			reply = await self._handlers[command](user_id, invoked, rest)
		except BotError as e:
			error = type(e).__name__
			reply = CommandReply(messages=[e.render(self.prefix)])
		except Exception:
			logger.exception("command failed command=%s user=%s", command, user_id)
			error = "unexpected"
			reply = CommandReply(messages=[GENERIC_ERROR])

		if self.audit is not None:
			await self.audit.log({
				"type": "command",
				"command": command,
				"invoked_as": invoked,
				"user_id": user_id,
				"error": error,
			})
		return reply

	async def _help(self, user_id: str, invoked: str, rest: str) -> CommandReply:
		return CommandReply(messages=[HELP_TEXT.format(p=self.prefix)])

	async def _ask(self, user_id: str, invoked: str, rest: str) -> CommandReply:
		query = rest.strip()
		if not query:
			return CommandReply(messages=[f"Please provide a query or a DSA problem to explain. Usage: `{self.prefix}ask <problem>`"])
		answer = await self.llm.answer_question(query)
		if len(answer) <= MESSAGE_LIMIT:
			return CommandReply(messages=[answer])
		return CommandReply(messages=split_message(answer, CHUNK_SIZE))

	async def _run(self, user_id: str, invoked: str, rest: str) -> CommandReply:
		language = RUN_ALIASES.get(invoked)
		code = rest
		if language is None:
			first, remainder = _split_first(rest)
			if normalize_language(first):
				language, code = first, remainder

		outcome = await self.runner.run(code, language)
		reply = CommandReply(embeds=[embeds.execution_embed(outcome.language, outcome.result)])
		if outcome.insight:
			reply.embeds.append(embeds.insight_embed(outcome.insight, self.llm.model_name))
		return reply

	async def _interview(self, user_id: str, invoked: str, rest: str) -> CommandReply:
		sub, remainder = _split_first(rest)
		sub = sub.lower()
		p = self.prefix
		if not sub:
			return CommandReply(messages=[
				f"Usage: `{p}interview start`, `{p}interview hint`, `{p}interview answer <code>`, or `{p}interview end`"
			])

		if sub == "start":
			session = await self.interviews.start(user_id)
			return CommandReply(embeds=[embeds.problem_embed(session.problem_fields, p)])
		if sub == "hint":
			hint = await self.interviews.hint(user_id)
			return CommandReply(embeds=[embeds.hint_embed(hint.hint, hint.session.hints_used)])
		if sub == "answer":
			feedback = await self.interviews.answer(user_id, remainder)
			return CommandReply(embeds=[embeds.feedback_embed(feedback.fields, feedback.passed, feedback.raw)])
		if sub == "end":
			ended = await self.interviews.end(user_id)
			return CommandReply(embeds=[embeds.summary_embed(ended.duration_minutes, ended.session.hints_used, ended.session.attempts)])
		return CommandReply(messages=["Invalid sub-command. Use `start`, `hint`, `answer`, or `end`."])


command_service = CommandService(
	interview_service,
	code_runner,
	llm_service,
	CooldownTracker(settings.cooldown_seconds),
	prefix=settings.command_prefix,
	audit=auditor,
)
