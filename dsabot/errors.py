from __future__ import annotations


class BotError(Exception):
	"""Base class for errors that are reported back to the user as a single reply."""

	user_message = "Sorry, I encountered an error. Please try again."

	def __init__(self, message: str | None = None) -> None:
		super().__init__(message or self.user_message)
		if message:
			self.user_message = message

	def render(self, prefix: str = "!") -> str:
		"""``user_message`` with its command examples spelled with ``prefix``."""
		return self.user_message.replace("{prefix}", prefix)


class SessionAlreadyActive(BotError):
	user_message = "⚠️ You already have an active interview session! Use `{prefix}interview end` to stop it."


class NoActiveSession(BotError):
	user_message = "❌ No active session. Start one with `{prefix}interview start`."


class ExternalServiceError(BotError):
	"""A collaborator call failed. ``detail`` is for logs; users only see ``user_message``."""

	user_message = "Sorry, I encountered an error while processing your request. Please try again later."

	def __init__(self, detail: str | None = None, *, user_message: str | None = None) -> None:
		super().__init__(user_message)
		self.detail = detail
		if detail:
			self.args = (detail,)


class UnsupportedLanguage(BotError):
	def __init__(self, language: str) -> None:
		self.language = language
		super().__init__(f"Unsupported language: `{language}`. Supported: `cpp`, `java`, `python`.")


class InvalidSubmission(BotError):
	user_message = "Please provide some code."
