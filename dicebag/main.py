from __future__ import annotations

from fastapi import FastAPI

from dicebag.config import settings
from dicebag.routers import rolls, sets

app = FastAPI(title="dicebag", debug=settings.debug)

app.include_router(rolls.router)
app.include_router(sets.router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "environment": settings.environment}
