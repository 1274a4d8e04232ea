# grade_horaria/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from grade_horaria.config import settings
from grade_horaria.errors import TimetableAppError
from grade_horaria.routers import export, generate, timetable

import time
import logging
from fastapi import Request
from grade_horaria.logging_config import setup_logging


setup_logging()
logger = logging.getLogger("grade_horaria")


app = FastAPI(title="Grade Horária", version="1.0.0")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


@app.exception_handler(TimetableAppError)
async def timetable_error_handler(request: Request, exc: TimetableAppError):
    logger.warning("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.status_code)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(generate.router)
app.include_router(timetable.router)
app.include_router(export.router)

@app.get("/")
def root():
    return {"message": "Grade Horária front end is running!"}
