from __future__ import annotations

from typing import Any, Dict
import logging

import httpx

from dsabot.config import settings
from dsabot.errors import ExternalServiceError, UnsupportedLanguage
from dsabot.schemas import ExecutionResult
from dsabot.utils.languages import get_language_config


logger = logging.getLogger(__name__)


def _to_result(data: Dict[str, Any]) -> ExecutionResult:
	status = data.get("status")
	# Wandbox folds stdout into program_message
	return ExecutionResult(
		stdout=data.get("program_message") or "",
		stderr=data.get("program_error") or "",
		compile_output=data.get("compiler_message") or data.get("compiler_error") or "",
		status="Success" if str(status) == "0" else f"Exit Code: {status}",
		time="N/A",
		memory="N/A",
	)


class ExecutionService:
	"""Runs source code on Wandbox (wandbox.org). One request per call, no retry."""

	def __init__(self, base_url: str | None = None, timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
		self._base_url = (base_url or settings.wandbox_url).rstrip("/")
		self._timeout = timeout if timeout is not None else settings.execution_timeout_seconds
		self._transport = transport

	async def execute(self, language: str, source_code: str) -> ExecutionResult:
		config = get_language_config(language)
		if config is None:
			raise UnsupportedLanguage(language)

		payload = {
			"compiler": config.compiler,
			"code": source_code,
			"save": False,
		}
		try:
			async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
				response = await client.post(f"{self._base_url}/api/compile.json", json=payload)
				response.raise_for_status()
				data = response.json()
		except (httpx.HTTPError, ValueError) as e:
			logger.error("wandbox request failed compiler=%s error=%s", config.compiler, e)
			raise ExternalServiceError(
				f"wandbox request failed: {e}",
				user_message="Failed to execute code via Wandbox. Please check your internet connection or try again later.",
			) from e

		result = _to_result(data)
		logger.info("wandbox executed compiler=%s status=%s", config.compiler, result.status)
		return result


execution_service = ExecutionService()
