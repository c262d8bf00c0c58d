from pathlib import Path
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from dotenv import load_dotenv

load_dotenv()

from portfolio.config import get_settings
from portfolio.routers import cv, data, site

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(
    title="Portfolio",
    description="Personal portfolio site with a database-backed data endpoint and PDF CV export.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount(
    "/static",
    StaticFiles(directory=Path(__file__).resolve().parent / "static"),
    name="static",
)

app.include_router(site.router, tags=["Site"])
app.include_router(data.router, prefix="/api", tags=["Portfolio Data"])
app.include_router(cv.router, prefix="/api", tags=["CV Export"])


# Local development runner
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("portfolio.main:app", host="127.0.0.1", port=8000, reload=True)
