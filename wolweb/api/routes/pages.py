"""HTML form — pick a machine and wake it."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from wolweb.api.deps import get_app_config, with_request_fields
from wolweb.config import AppConfig
from wolweb.utils.wol import WolError, wake_machine

logger = logging.getLogger(__name__)
router = APIRouter()

_MACHINE_ID = re.compile(r"[+-]?[0-9]+")

templates = Jinja2Templates(directory=Path(__file__).resolve().parent.parent.parent / "templates")


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def wake_page(request: Request, config: AppConfig = Depends(get_app_config)):
    return templates.TemplateResponse(
        request, "index.html", {"machines": config.machines, "sent_name": None}
    )


@router.post("/", response_class=HTMLResponse, include_in_schema=False)
def wake_from_form(
    request: Request,
    machine: str = Form(""),
    config: AppConfig = Depends(get_app_config),
):
    """Send the magic packet to every port of the selected machine."""
    log = with_request_fields(logger, request)
    if not _MACHINE_ID.fullmatch(machine):
        log.error("Cannot parse machine id: %r", machine)
        raise HTTPException(400, f"Cannot parse machine id: {machine!r}")
    index = int(machine)

    if index < 0 or index >= len(config.machines):
        log.error("Machine id %d out of range (max %d)", index, len(config.machines))
        raise HTTPException(400, "Machine id out of range")

    mach = config.machines[index]
    try:
        wake_machine(config.broadcast, mach, log)
    except WolError as e:
        log.error("Failed to send magic packet to %s (%s): %s", mach.name, mach.mac, e)
        raise HTTPException(500, f"Failed to send magic packet to machine: {e}")

    return templates.TemplateResponse(
        request, "index.html", {"machines": config.machines, "sent_name": mach.name}
    )
