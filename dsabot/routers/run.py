from __future__ import annotations

from fastapi import APIRouter, Depends

from dsabot.deps import get_code_runner, http_error
from dsabot.errors import BotError
from dsabot.schemas import DetectIn, DetectOut, RunIn, RunOut
from dsabot.services.code_runner import CodeRunner
from dsabot.utils.language_detector import detect, score
from dsabot.utils.source_prep import strip_code_fences


router = APIRouter()


@router.post("/run", response_model=RunOut)
async def run_code(payload: RunIn, runner: CodeRunner = Depends(get_code_runner)):
	try:
		outcome = await runner.run(payload.code, payload.language, explain=payload.explain)
	except BotError as e:
		raise http_error(e)
	return RunOut(
		language=outcome.language,
		detected=outcome.detected,
		result=outcome.result,
		insight=outcome.insight,
	)


@router.post("/detect", response_model=DetectOut)
async def detect_language(payload: DetectIn):
	_, code = strip_code_fences(payload.code)
	return DetectOut(language=detect(code), scores=score(code))
