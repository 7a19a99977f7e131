"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from incentive_calc.api.routes import calculator
from incentive_calc.config import settings
from incentive_calc.logging_config import setup_logging

setup_logging(settings.log_level)

app = FastAPI(
    title=settings.app_title,
    description="Compare home costs with and without builder incentives",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calculator.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
