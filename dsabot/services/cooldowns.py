from __future__ import annotations

from typing import Callable, Dict, Tuple
import time


class CooldownTracker:
	"""Per (command, user) cooldown. Aliases share the canonical command name."""

	def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
		self._seconds = seconds
		self._clock = clock
		self._last_used: Dict[Tuple[str, str], float] = {}

	def hit(self, command: str, user_id: str) -> float:
		"""Register a use and return 0, or return the seconds still to wait without registering."""
		if self._seconds <= 0:
			return 0.0
		now = self._clock()
		key = (command, user_id)
		last = self._last_used.get(key)
		if last is not None:
			remaining = last + self._seconds - now
			if remaining > 0:
				return remaining
		self._last_used[key] = now
		self._prune(now)
		return 0.0

	def _prune(self, now: float) -> None:
		expired = [k for k, t in self._last_used.items() if now - t >= self._seconds]
		for k in expired:
			self._last_used.pop(k, None)
