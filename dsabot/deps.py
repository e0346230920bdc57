from __future__ import annotations

from fastapi import HTTPException, status

from dsabot.config import settings
from dsabot.errors import (
	BotError,
	ExternalServiceError,
	InvalidSubmission,
	NoActiveSession,
	SessionAlreadyActive,
	UnsupportedLanguage,
)
from dsabot.services.code_runner import CodeRunner, code_runner
from dsabot.services.command_service import CommandService, command_service
from dsabot.services.interview_service import InterviewService, interview_service
from dsabot.services.llm_service import LLMService, llm_service


_STATUS = {
	SessionAlreadyActive: status.HTTP_409_CONFLICT,
	NoActiveSession: status.HTTP_404_NOT_FOUND,
	ExternalServiceError: status.HTTP_502_BAD_GATEWAY,
	UnsupportedLanguage: status.HTTP_400_BAD_REQUEST,
	InvalidSubmission: status.HTTP_400_BAD_REQUEST,
}


def http_error(error: BotError) -> HTTPException:
	return HTTPException(status_code=_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST), detail=error.render(settings.command_prefix))


def get_llm_service() -> LLMService:
	return llm_service


def get_code_runner() -> CodeRunner:
	return code_runner


def get_interview_service() -> InterviewService:
	return interview_service


def get_command_service() -> CommandService:
	return command_service
