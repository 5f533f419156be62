from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import Response
from fastapi.middleware.cors import CORSMiddleware
import asyncio
import json
import logging
from typing import Dict, Set, Iterable

import uvicorn

from chessbot.commands import CommandHandler, Reply
from chessbot.config import configure_logging, load_settings
from chessbot.registry import SessionRegistry
from chessbot.render import render_board

logger = logging.getLogger(__name__)

settings = load_settings()

app = FastAPI(title="chessbot")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---- Game and connection storage ----
app.state.registry = SessionRegistry()
app.state.handler = CommandHandler(app.state.registry, settings)
connections: Dict[str, Set[WebSocket]] = {}


def reply_payload(reply: Reply) -> dict:
    return {"type": "reply", "text": reply.text, "board": reply.board}


async def deliver(replies: Iterable[Reply]) -> None:
    """Send every reply to each connected socket of each recipient."""
    sends = []
    for reply in replies:
        msg = json.dumps(reply_payload(reply))
        for participant in reply.recipients:
            for ws in list(connections.get(participant, ())):
                sends.append(ws.send_text(msg))
    if sends:
        await asyncio.gather(*sends, return_exceptions=True)


# ---- HTTP routes ----
@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "games": len(app.state.registry)}


@app.get("/games/{participant}")
async def game_state(participant: str) -> dict:
    registry: SessionRegistry = app.state.registry
    with registry.borrow(participant) as session:
        if session is None:
            raise HTTPException(status_code=404, detail="No active game for that user.")
        return session.state_payload()


@app.get("/games/{participant}/board.svg")
async def board_svg(participant: str) -> Response:
    registry: SessionRegistry = app.state.registry
    with registry.borrow(participant) as session:
        if session is None:
            raise HTTPException(status_code=404, detail="No active game for that user.")
        snapshot = session.oracle.board.copy()
    svg = await asyncio.to_thread(render_board, snapshot, size=settings.board_size)
    return Response(content=svg, media_type="image/svg+xml")


# ---- WebSocket endpoint ----
async def send_error(websocket: WebSocket, detail: str) -> None:
    await websocket.send_text(json.dumps({"type": "error", "detail": detail}))


@app.websocket("/ws/{participant}")
async def ws_participant(websocket: WebSocket, participant: str) -> None:
    await websocket.accept()

    handler: CommandHandler = app.state.handler
    sockets = connections.setdefault(participant, set())
    sockets.add(websocket)
    logger.debug("%s connected", participant)

    try:
        await websocket.send_text(json.dumps({"type": "hello", "youAre": participant}))

        while True:
            data = await websocket.receive_text()
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                await send_error(websocket, "Messages must be JSON.")
                continue

            if not isinstance(msg, dict) or msg.get("type") != "command":
                await send_error(websocket, "Unknown message type.")
                continue

            mentions = msg.get("mentions") or []
            if not isinstance(mentions, list):
                await send_error(websocket, "Mentions must be a list.")
                continue

            content = str(msg.get("content") or "")
            try:
                # rendering and file writes happen in here; keep them off the event loop
                replies = await asyncio.to_thread(
                    handler.handle, participant, content, [str(m) for m in mentions]
                )
            except Exception:
                logger.exception("command %r from %s failed", content, participant)
                await send_error(websocket, "Something went wrong handling that command.")
                continue

            await deliver(replies)

    except WebSocketDisconnect:
        logger.debug("%s disconnected", participant)
    finally:
        sockets.discard(websocket)
        if not sockets and connections.get(participant) is sockets:
            connections.pop(participant, None)


def main() -> None:
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
