from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from dsabot.schemas import Embed, EmbedField, ExecutionResult, FeedbackFields, ProblemFields
from dsabot.utils.languages import get_language_config
from dsabot.utils.source_prep import truncate


BLUE = 0x0099FF
AMBER = 0xFFBF00
GREEN = 0x00FF00
RED = 0xFF0000
BLURPLE = 0x5865F2
ERROR_RED = 0xED4245
PINK = 0xEB459E

# Chat platforms cap field values at 1024 and descriptions at 4096 characters
FIELD_LIMIT = 1000
DESCRIPTION_LIMIT = 4000
# Time and space share the one complexity field
COMPLEXITY_LIMIT = FIELD_LIMIT // 2 - 20


def _block(text: str) -> str:
	return f"```\n{text}\n```"


def problem_embed(fields: ProblemFields, prefix: str = "!") -> Embed:
	return Embed(
		title=f"🧠 DSA Interview: {fields.title or 'Coding Challenge'}",
		color=BLUE,
		fields=[
			EmbedField(name="Difficulty", value=fields.difficulty or "Unknown", inline=True),
			EmbedField(name="Problem Statement", value=truncate(fields.statement, FIELD_LIMIT) or "No description provided."),
			EmbedField(name="Constraints", value=truncate(fields.constraints, FIELD_LIMIT) or "Standard competitive programming limits."),
			EmbedField(name="Sample I/O", value=_block(truncate(fields.sample_io, FIELD_LIMIT) or "N/A")),
		],
		footer=f"Use {prefix}interview answer <code> to submit your solution.",
	)


def hint_embed(hint: str, hints_used: int) -> Embed:
	return Embed(
		title="💡 Interview Hint",
		color=AMBER,
		description=truncate(hint, DESCRIPTION_LIMIT),
		footer=f"Hints used: {hints_used}",
	)


def feedback_embed(fields: FeedbackFields, passed: bool, raw: str) -> Embed:
	time_complexity = truncate(fields.time_complexity, COMPLEXITY_LIMIT) or "N/A"
	space_complexity = truncate(fields.space_complexity, COMPLEXITY_LIMIT) or "N/A"
	embed = Embed(
		title="🧠 Interview Feedback",
		color=GREEN if passed else RED,
		fields=[
			EmbedField(name="Correctness", value=truncate(fields.correctness, FIELD_LIMIT) or "See below"),
			EmbedField(name="Complexity", value=f"Time: {time_complexity}\nSpace: {space_complexity}"),
			EmbedField(name="Edge Cases", value=truncate(fields.edge_cases, FIELD_LIMIT) or "N/A"),
			EmbedField(name="Optimization", value=truncate(fields.optimization, FIELD_LIMIT) or "N/A"),
			EmbedField(name="Final Verdict", value=truncate(fields.verdict, FIELD_LIMIT) or "N/A"),
		],
	)
	# Model ignored the section format; show the raw feedback instead
	if not fields.correctness:
		embed.description = raw if len(raw) <= DESCRIPTION_LIMIT else raw[:DESCRIPTION_LIMIT - 3] + "..."
	return embed


def summary_embed(duration_minutes: int, hints_used: int, attempts: int) -> Embed:
	return Embed(
		title="🏁 Interview Session Ended",
		color=BLUE,
		description="Great effort! Keep practicing to sharpen your skills.",
		fields=[
			EmbedField(name="Duration", value=f"{duration_minutes} minutes", inline=True),
			EmbedField(name="Hints Used", value=str(hints_used), inline=True),
			EmbedField(name="Attempts", value=str(attempts), inline=True),
		],
	)


def execution_embed(language: str, result: ExecutionResult) -> Embed:
	config = get_language_config(language)
	display = config.name if config else language
	embed = Embed(
		title=f"👨‍💻 Code Execution Result ({display.upper()})",
		color=BLURPLE,
		footer=f"Time: {result.time}s | Memory: {result.memory}KB",
		timestamp=datetime.now(timezone.utc),
	)
	if result.stdout:
		embed.fields.append(EmbedField(name="📤 Output", value=_block(truncate(result.stdout, FIELD_LIMIT))))
	error_content = result.compile_output or result.stderr
	if error_content:
		embed.color = ERROR_RED
		name = "❌ Compilation Error" if result.compile_output else "⚠️ Runtime Error"
		embed.fields.append(EmbedField(name=name, value=_block(truncate(error_content, FIELD_LIMIT))))
	if not result.stdout and not error_content:
		embed.description = f"**Status:** {result.status} (No output)"
	return embed


def insight_embed(text: str, provider: Optional[str] = None) -> Embed:
	return Embed(
		title="✨ Zia's Insights",
		color=PINK,
		description=truncate(text, DESCRIPTION_LIMIT),
		footer=f"Powered by {provider}" if provider else None,
	)
