"""FastAPI dependency injection — immutable app configuration, request logging."""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status

from wolweb.config import AppConfig, MachineConfig


class RequestLogger(logging.LoggerAdapter):
    """Prefixes messages with the request id and attaches request fields as ``extra``."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return f"[{self.extra['request_id']}] {msg}", kwargs


def with_request_fields(log: logging.Logger, request: Request) -> RequestLogger:
    """Bind the id assigned by the request middleware, plus method and path."""
    return RequestLogger(
        log,
        {
            "request_id": getattr(request.state, "request_id", "-"),
            "method": request.method,
            "path": request.url.path,
        },
    )


def get_app_config(request: Request) -> AppConfig:
    """Configuration handed to the app by ``create_app``."""
    return request.app.state.config


def get_machine(machine_id: int, config: AppConfig = Depends(get_app_config)) -> MachineConfig:
    """Resolve a machine by its index in the configured list."""
    if machine_id < 0 or machine_id >= len(config.machines):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Machine {machine_id} not found",
        )
    return config.machines[machine_id]
