from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from dsabot.deps import get_interview_service, http_error
from dsabot.errors import BotError
from dsabot.schemas import (
	FeedbackOut,
	HintOut,
	InterviewAnswerIn,
	InterviewOut,
	InterviewSummaryOut,
	InterviewUserIn,
)
from dsabot.services.interview_service import InterviewService
from dsabot.services.interview_store import InterviewSession


router = APIRouter()


def _session_out(session: InterviewSession) -> InterviewOut:
	return InterviewOut(
		user_id=session.user_id,
		problem=session.problem_fields,
		problem_text=session.problem_text,
		hints_used=session.hints_used,
		attempts=session.attempts,
		started_at=session.start_time,
	)


@router.post("/interview/start", response_model=InterviewOut)
async def start_interview(payload: InterviewUserIn, interviews: InterviewService = Depends(get_interview_service)):
	try:
		session = await interviews.start(payload.user_id)
	except BotError as e:
		raise http_error(e)
	return _session_out(session)


@router.get("/interview/{user_id}", response_model=InterviewOut)
async def get_interview(user_id: str, interviews: InterviewService = Depends(get_interview_service)):
	session = await interviews.store.get_active(user_id)
	if session is None:
		raise HTTPException(status_code=404, detail="No active interview session")
	return _session_out(session)


@router.post("/interview/hint", response_model=HintOut)
async def interview_hint(payload: InterviewUserIn, interviews: InterviewService = Depends(get_interview_service)):
	try:
		outcome = await interviews.hint(payload.user_id)
	except BotError as e:
		raise http_error(e)
	return HintOut(user_id=payload.user_id, hint=outcome.hint, hints_used=outcome.session.hints_used)


@router.post("/interview/answer", response_model=FeedbackOut)
async def interview_answer(payload: InterviewAnswerIn, interviews: InterviewService = Depends(get_interview_service)):
	try:
		outcome = await interviews.answer(payload.user_id, payload.code)
	except BotError as e:
		raise http_error(e)
	return FeedbackOut(
		user_id=payload.user_id,
		feedback=outcome.fields,
		passed=outcome.passed,
		raw=outcome.raw,
		attempts=outcome.session.attempts,
	)


@router.post("/interview/end", response_model=InterviewSummaryOut)
async def end_interview(payload: InterviewUserIn, interviews: InterviewService = Depends(get_interview_service)):
	try:
		outcome = await interviews.end(payload.user_id)
	except BotError as e:
		raise http_error(e)
	return InterviewSummaryOut(
		user_id=payload.user_id,
		duration_minutes=outcome.duration_minutes,
		hints_used=outcome.session.hints_used,
		attempts=outcome.session.attempts,
	)
