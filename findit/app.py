"""findit-engine: word → game content service for the Find It! matching game."""

from __future__ import annotations

import logging
import os
import time
from collections import deque
from contextlib import asynccontextmanager
from threading import Lock

import psutil
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from findit.db import close_database, get_database, get_stats, init_database
from findit.providers.llm_provider import FallbackConfig

logger = logging.getLogger("findit")

PORT = int(os.environ.get("FI_PORT", "9820"))


# ---------------------------------------------------------------------------
# RateCounter: thread-safe sliding-window request counter
# ---------------------------------------------------------------------------

SPARKLINE_BUCKETS = 60


class RateCounter:
    """Count events in a sliding window and expose per-second rate + history."""

    def __init__(self, window: float = 60.0) -> None:
        self._window = window
        self._lock = Lock()
        self._timestamps: deque[float] = deque()
        self._sparkline: deque[float] = deque(maxlen=SPARKLINE_BUCKETS)

    def record(self) -> None:
        now = time.monotonic()
        with self._lock:
            self._timestamps.append(now)

    def _prune(self, now: float) -> None:
        cutoff = now - self._window
        while self._timestamps and self._timestamps[0] < cutoff:
            self._timestamps.popleft()

    def rate(self) -> float:
        now = time.monotonic()
        with self._lock:
            self._prune(now)
            count = len(self._timestamps)
        return count / self._window if self._window else 0.0

    def snapshot_sparkline(self) -> None:
        self._sparkline.append(round(self.rate(), 2))

    def sparkline_history(self) -> list[float]:
        return list(self._sparkline)


request_counter = RateCounter(window=60.0)
_start_time: float = 0.0


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    global _start_time
    _start_time = time.time()

    # A missing database is fatal: run findit-build first
    init_database()

    config = FallbackConfig()
    app.state.fallback_config = config
    logger.info("Fallback config: %s", config.to_dict())

    yield

    close_database()
    logger.info("Symbol database released")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="findit-engine",
    version="0.1.0",
    description="Target + distractor content for the Find It! matching game",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Request counting middleware
# ---------------------------------------------------------------------------

@app.middleware("http")
async def count_requests(request: Request, call_next):
    request_counter.record()
    return await call_next(request)


# ---------------------------------------------------------------------------
# Include adapter routers
# ---------------------------------------------------------------------------

from findit.adapters.game import router as game_router  # noqa: E402
from findit.adapters.symbols import router as symbols_router  # noqa: E402

app.include_router(game_router)
app.include_router(symbols_router)


# ---------------------------------------------------------------------------
# Core routes
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    """Health check: reports whether the symbol database is loaded."""
    result: dict = {"status": "ok"}
    try:
        database = get_database()
        result["database"] = "loaded"
        result["symbols"] = len(database)
    except RuntimeError:
        result["status"] = "degraded"
        result["database"] = "not_loaded"
    return result


@app.get("/metrics")
async def metrics():
    """Stats endpoint for server-monitor dashboard."""
    try:
        now = time.time()
        process = psutil.Process(os.getpid())
        mem = process.memory_info()

        request_counter.snapshot_sparkline()

        # -- System metrics ---------------------------------------------------

        uptime = now - _start_time if _start_time else 0.0
        rps = request_counter.rate()

        result: list[dict] = [
            {
                "key": "uptime",
                "label": "Uptime",
                "value": round(uptime),
                "unit": "seconds",
            },
            {
                "key": "rps",
                "label": "Requests / sec",
                "value": round(rps, 2),
                "unit": "req/s",
                "warn_above": 200,
                "sparkline_history": request_counter.sparkline_history(),
            },
            {
                "key": "memory_rss",
                "label": "Memory (RSS)",
                "value": round(mem.rss / 1_048_576, 1),
                "unit": "MB",
                "warn_above": 512,
            },
            {
                "key": "cpu_percent",
                "label": "CPU usage",
                "value": process.cpu_percent(interval=0),
                "unit": "%",
                "warn_above": 90,
            },
        ]

        # -- Symbol database --------------------------------------------------

        stats = get_stats(get_database())

        result.extend([
            {"key": "total_symbols", "label": "Symbols", "value": stats["total_symbols"], "unit": "symbols"},
            {"key": "total_categories", "label": "Public categories", "value": stats["total_categories"], "unit": "categories"},
            {"key": "internal_categories", "label": "Internal categories", "value": stats["internal_categories"], "unit": "categories"},
            {"key": "total_names", "label": "Searchable names", "value": stats["total_names"], "unit": "names"},
        ])

        for category, count in stats["symbols_by_category"].items():
            result.append({
                "key": f"symbols_{category}",
                "label": f"Symbols ({category})",
                "value": count,
                "unit": "symbols",
                "warn_below": 3,
            })

        # -- Fallback ---------------------------------------------------------

        fallback = app.state.fallback_config
        result.append({
            "key": "fallback_provider",
            "label": "LLM fallback",
            "value": fallback.provider if fallback.enabled else "disabled",
            "unit": "",
        })

        return {"metrics": result}

    except Exception as exc:
        logger.exception("Error fetching metrics")
        return JSONResponse(
            status_code=500,
            content={"metrics": [], "error": f"Metrics error: {exc}"},
        )


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

def run() -> None:
    uvicorn.run("findit.app:app", host="127.0.0.1", port=PORT, reload=False)


if __name__ == "__main__":
    run()
