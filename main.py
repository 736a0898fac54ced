# main.py
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
# REST routes
from api.routes import router as api_router
from realtime.endpoints import ws_endpoint
from state import GameRoom


def create_app(room: Optional[GameRoom] = None) -> FastAPI:
    app = FastAPI(title="Market Call", version="2.0")
    app.state.room = room or GameRoom()

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- REST API ---
    app.include_router(api_router)

    # --- WebSockets ---
    app.add_api_websocket_route("/ws", ws_endpoint)

    # --- Healthcheck ---
    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()

# --- Dev runner ---
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=config.HOST, port=config.PORT)
