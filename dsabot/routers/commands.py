from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from dsabot.deps import get_command_service
from dsabot.schemas import CommandIn, CommandReply
from dsabot.services.command_service import CommandService


router = APIRouter()


@router.post("/command", response_model=CommandReply, responses={204: {"description": "Not a bot command; nothing to post"}})
async def handle_command(payload: CommandIn, commands: CommandService = Depends(get_command_service)):
	"""Entry point for the chat gateway: forwards every message, gets back what to post."""
	reply = await commands.handle(payload.user_id, payload.content)
	if reply is None:
		return Response(status_code=status.HTTP_204_NO_CONTENT)
	return reply
