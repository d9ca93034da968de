"""Command route: channel bridges POST inbound chat text here."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from pydantic import BaseModel

from cronlens.commands.base import CommandContext, is_sender_allowed

logger = logging.getLogger("cronlens.server.commands")

commands_router = APIRouter(prefix="/commands", tags=["Commands"])


class CommandRequest(BaseModel):
    text: str
    sender_id: str | None = None
    channel: str = "http"


class ReplyModel(BaseModel):
    text: str
    is_error: bool = False


class CommandResponse(BaseModel):
    handled: bool
    should_continue: bool = True
    reply: ReplyModel | None = None


@commands_router.post("", response_model=CommandResponse)
async def run_command(body: CommandRequest, request: Request) -> CommandResponse:
    """Run the /cron command for an inbound message.

    ``handled=false`` means the text is not a command we own and the caller
    should route it elsewhere. Delivery of ``reply`` is up to the caller.
    """
    settings = request.app.state.settings
    command = request.app.state.cron_command

    context = CommandContext(
        command_body=body.text,
        is_authorized_sender=is_sender_allowed(
            body.sender_id, settings.commands.allowed_senders
        ),
        sender_id=body.sender_id,
        channel=body.channel,
    )
    result = await command.handle(
        context, allow_text_commands=settings.commands.text_enabled
    )
    if result is None:
        return CommandResponse(handled=False)

    reply = None
    if result.reply is not None:
        reply = ReplyModel(text=result.reply.text, is_error=result.reply.is_error)
    return CommandResponse(
        handled=True, should_continue=result.should_continue, reply=reply
    )
