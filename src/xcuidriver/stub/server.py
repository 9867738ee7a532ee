"""A local stand-in for WebDriverAgent.

Answers the endpoints the driver uses with canned screen geometry and
records every command it receives, so the driver and the HTTP proxy can
be exercised without a device. Responses use the agent's envelope:

    GET    /status                       -> {"value": {"ready": true, ...}}
    POST   /session                      -> {"sessionId": ..., "value": {...}}
    DELETE /session/{id}
    POST   /session/{id}/wda/deactivateApp  <- {"duration": 3}
    POST   /session/{id}/wda/touch_id       <- {"match": true}
    GET    /session/{id}/window/size
    GET    /session/{id}/wda/screen
    POST   /session/{id}/wda/keyboard/dismiss
    POST   /session/{id}/wda/pressButton    <- {"name": "home"}
    POST   /session/{id}/wda/siri/activate  <- {"text": "..."}
    POST   /session/{id}/wda/lock
    POST   /session/{id}/wda/unlock
    GET    /session/{id}/wda/locked
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request / state models
# ---------------------------------------------------------------------------

class DeactivateAppRequest(BaseModel):
    duration: float | None = Field(default=None, description="Seconds in background")


class TouchIdRequest(BaseModel):
    match: bool = Field(default=True)


class PressButtonRequest(BaseModel):
    name: str


class SiriRequest(BaseModel):
    text: str


class StubAgentState(BaseModel):
    """Canned device state and a log of received commands."""

    window_width: float = 375
    window_height: float = 667
    scale: float = 2
    status_bar_width: float = 375
    status_bar_height: float = 20
    locked: bool = False
    sessions: set[str] = Field(default_factory=set)
    commands: list[tuple[str, Any]] = Field(default_factory=list)


class InvalidSessionError(Exception):
    """Raised when a request names a session the stub does not know."""


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def _ok(value: Any = None, session_id: str | None = None) -> dict[str, Any]:
    return {"value": value, "sessionId": session_id, "status": 0}


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"value": {"error": error, "message": message, "traceback": ""}},
    )


def create_app(state: StubAgentState | None = None) -> FastAPI:
    """Create the stub agent application.

    Args:
        state: Optional pre-configured state (for testing).
    """
    app = FastAPI(
        title="xcuidriver stub agent",
        description="Local stand-in for WebDriverAgent",
        version="0.1.0",
    )
    app.state.agent = state if state is not None else StubAgentState()

    def _agent() -> StubAgentState:
        return app.state.agent

    def _session(session_id: str) -> StubAgentState:
        agent = _agent()
        if session_id not in agent.sessions:
            raise InvalidSessionError(f"Session {session_id} does not exist")
        return agent

    @app.exception_handler(InvalidSessionError)
    async def invalid_session(request: Request, exc: InvalidSessionError) -> JSONResponse:
        return _error(404, "invalid session id", str(exc))

    @app.get("/status")
    async def status() -> dict[str, Any]:
        return _ok({"ready": True, "message": "WebDriverAgent is ready to accept commands"})

    @app.post("/session")
    async def create_session(request: Request) -> dict[str, Any]:
        body = await request.json()
        session_id = str(uuid.uuid4()).upper()
        agent = _agent()
        agent.sessions.add(session_id)
        agent.commands.append(("session", body))
        caps = body.get("capabilities", {}).get("alwaysMatch", {})
        logger.info("Stub session %s created", session_id)
        return _ok({"sessionId": session_id, "capabilities": caps}, session_id)

    @app.delete("/session/{session_id}")
    async def delete_session(session_id: str) -> dict[str, Any]:
        _session(session_id).sessions.discard(session_id)
        logger.info("Stub session %s deleted", session_id)
        return _ok()

    @app.post("/session/{session_id}/wda/deactivateApp")
    async def deactivate_app(
        session_id: str, request: DeactivateAppRequest
    ) -> dict[str, Any]:
        _session(session_id).commands.append(("deactivateApp", request.duration))
        return _ok(session_id=session_id)

    @app.post("/session/{session_id}/wda/touch_id")
    async def touch_id(session_id: str, request: TouchIdRequest) -> dict[str, Any]:
        _session(session_id).commands.append(("touch_id", request.match))
        return _ok(True, session_id)

    @app.get("/session/{session_id}/window/size")
    async def window_size(session_id: str) -> dict[str, Any]:
        agent = _session(session_id)
        return _ok({"width": agent.window_width, "height": agent.window_height}, session_id)

    @app.get("/session/{session_id}/wda/screen")
    async def screen(session_id: str) -> dict[str, Any]:
        agent = _session(session_id)
        return _ok(
            {
                "statusBarSize": {
                    "width": agent.status_bar_width,
                    "height": agent.status_bar_height,
                },
                "scale": agent.scale,
            },
            session_id,
        )

    @app.post("/session/{session_id}/wda/keyboard/dismiss")
    async def dismiss_keyboard(session_id: str) -> dict[str, Any]:
        _session(session_id).commands.append(("keyboard/dismiss", None))
        return _ok(session_id=session_id)

    @app.post("/session/{session_id}/wda/pressButton")
    async def press_button(
        session_id: str, request: PressButtonRequest
    ) -> dict[str, Any]:
        _session(session_id).commands.append(("pressButton", request.name))
        return _ok(session_id=session_id)

    @app.post("/session/{session_id}/wda/siri/activate")
    async def siri_activate(session_id: str, request: SiriRequest) -> dict[str, Any]:
        _session(session_id).commands.append(("siri", request.text))
        return _ok(session_id=session_id)

    @app.post("/session/{session_id}/wda/lock")
    async def lock(session_id: str) -> dict[str, Any]:
        _session(session_id).locked = True
        return _ok(session_id=session_id)

    @app.post("/session/{session_id}/wda/unlock")
    async def unlock(session_id: str) -> dict[str, Any]:
        _session(session_id).locked = False
        return _ok(session_id=session_id)

    @app.get("/session/{session_id}/wda/locked")
    async def locked(session_id: str) -> dict[str, Any]:
        return _ok(_session(session_id).locked, session_id)

    return app


# ---------------------------------------------------------------------------
# Standalone entry point
# ---------------------------------------------------------------------------

def main(host: str = "127.0.0.1", port: int = 8100) -> None:
    """Run the stub agent."""
    app = create_app()
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
