"""Machine routes — list configured machines and wake them over the JSON API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from wolweb.api.deps import get_app_config, get_machine, with_request_fields
from wolweb.config import AppConfig, MachineConfig
from wolweb.schemas.machine import MachineOut, WakeResult
from wolweb.utils.wol import WolError, wake_machine

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[MachineOut])
async def list_machines(config: AppConfig = Depends(get_app_config)):
    """All configured machines, in config file order."""
    return [
        MachineOut(id=i, name=m.name, mac=m.mac, ports=list(m.ports))
        for i, m in enumerate(config.machines)
    ]


@router.post("/{machine_id}/wake", response_model=WakeResult)
def wake(
    request: Request,
    machine: MachineConfig = Depends(get_machine),
    config: AppConfig = Depends(get_app_config),
):
    """Send a magic packet to every port of one machine."""
    log = with_request_fields(logger, request)
    try:
        wake_machine(config.broadcast, machine, log)
    except WolError as e:
        log.error("Failed to send magic packet to %s: %s", machine.name, e)
        raise HTTPException(500, f"Failed to send magic packet to machine: {e}")

    log.info("Woke %s (%s) on ports %s", machine.name, machine.mac, list(machine.ports))
    return WakeResult(name=machine.name, ports=list(machine.ports))
