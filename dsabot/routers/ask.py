from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from dsabot.deps import get_llm_service, http_error
from dsabot.errors import BotError
from dsabot.schemas import AskIn, AskOut
from dsabot.services.llm_service import LLMService
from dsabot.utils.source_prep import split_message


router = APIRouter()


@router.post("/ask", response_model=AskOut)
async def ask(payload: AskIn, llm: LLMService = Depends(get_llm_service)):
	if not payload.question.strip():
		raise HTTPException(status_code=400, detail="Empty question")
	try:
		answer = await llm.answer_question(payload.question.strip())
	except BotError as e:
		raise http_error(e)
	return AskOut(answer=answer, chunks=split_message(answer), created_at=datetime.now(timezone.utc))
