import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gomoku_ai import config
from gomoku_ai.game import Difficulty
from gomoku_ai.ws_handler import router as ws_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Gomoku Engine")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(ws_router)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/difficulties")
async def difficulties():
    return [
        {
            "id": d.value,
            "name": d.display_name,
            "search_depth": d.search_depth,
            "think_ticks": d.think_ticks,
        }
        for d in Difficulty
    ]
