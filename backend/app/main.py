import logging
from typing import List, Optional

from fastapi import FastAPI, UploadFile, File, Form, Depends, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import config
from app.analysis_service import (
    delete_analysis,
    get_analyses_by_user,
    get_analysis_by_id,
    save_analysis,
    update_analysis_status,
)
from app.auth import authenticate_user, create_user, get_current_user
from app.candidates import compute_statistics, run_pipeline
from app.db import ensure_indexes, get_analyses_collection, get_users_collection
from app.errors import AppError, NotFoundError, ValidationError
from app.extract_utils import safe_extract_text
from app.models import EMAIL_ADAPTER, Analysis, SigninRequest, SignupRequest, StatusUpdate, UserPublic

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Smart Resume Screener")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    await ensure_indexes()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error(400, "Invalid request")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")


def _set_auth_cookie(response: Response, token: str):
    response.set_cookie(
        config.COOKIE_NAME,
        token,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite="strict",
        max_age=config.TOKEN_TTL_DAYS * 24 * 60 * 60,
        path="/",
    )


def _validate_upload(job_description: Optional[str], files: Optional[List[UploadFile]]):
    if not job_description or not files:
        raise ValidationError("Missing required fields")
    if len(files) > config.MAX_FILES:
        raise ValidationError(f"Maximum {config.MAX_FILES} files allowed")
    if len(job_description.strip()) < config.MIN_JOB_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Job description must be at least {config.MIN_JOB_DESCRIPTION_LENGTH} characters"
        )


async def _read_files(files: List[UploadFile]):
    pairs = []
    for file in files:
        name = file.filename or "unnamed"
        content = await file.read()
        text = await run_in_threadpool(safe_extract_text, name, content)
        logger.info("Extracted %d characters from %s", len(text), name)
        pairs.append((name, text))
    return pairs


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/auth/signup")
async def signup(body: SignupRequest, response: Response, users_col=Depends(get_users_collection)):
    missing = [f for f in ("name", "email", "password") if not getattr(body, f)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    if len(body.password) < 6:
        raise ValidationError("Password must be at least 6 characters")
    if len(body.password.encode("utf-8")) > 72:
        raise ValidationError("Password must be at most 72 bytes")
    try:
        EMAIL_ADAPTER.validate_python(body.email)
    except PydanticValidationError:
        raise ValidationError("Please enter a valid email address") from None

    user, token = await create_user(users_col, body.name, body.email, body.password)
    _set_auth_cookie(response, token)
    return {
        "success": True,
        "message": "User created successfully",
        "user": user.model_dump(by_alias=True, mode="json"),
        "token": token,
    }


@app.post("/auth/signin")
async def signin(body: SigninRequest, response: Response, users_col=Depends(get_users_collection)):
    if not body.email or not body.password:
        raise ValidationError("Missing email or password")

    user, token = await authenticate_user(users_col, body.email, body.password)
    _set_auth_cookie(response, token)
    return {
        "success": True,
        "message": "Authentication successful",
        "user": user.model_dump(by_alias=True, mode="json"),
        "token": token,
    }


@app.post("/auth/signout")
async def signout(response: Response):
    response.delete_cookie(config.COOKIE_NAME, path="/")
    return {"success": True, "message": "Signed out"}


@app.get("/auth/me")
async def me(user: UserPublic = Depends(get_current_user)):
    return {"success": True, "user": user.model_dump(by_alias=True, mode="json")}


@app.post("/analysis/create")
async def create_analysis(
    title: Optional[str] = Form(None),
    job_description: Optional[str] = Form(None, alias="jobDescription"),
    files: Optional[List[UploadFile]] = File(None),
    user: UserPublic = Depends(get_current_user),
    analyses_col=Depends(get_analyses_collection),
):
    """Score uploaded resumes against a job description and store the result."""
    if not title:
        raise ValidationError("Missing required fields")
    _validate_upload(job_description, files)

    pairs = await _read_files(files)
    candidates = run_pipeline(pairs, job_description)
    analysis = Analysis(
        user_id=user.id,
        title=title,
        job_description=job_description,
        candidates=candidates,
        status="completed",
        statistics=compute_statistics(candidates),
    )
    analysis.id = await save_analysis(analyses_col, analysis)
    logger.info("Saved analysis %s with %d candidates", analysis.id, len(candidates))

    return {
        "success": True,
        "message": "Analysis created successfully",
        "analysisId": analysis.id,
        "analysis": analysis.model_dump(by_alias=True, mode="json"),
    }


@app.get("/analysis/list")
async def list_analyses(
    user: UserPublic = Depends(get_current_user),
    analyses_col=Depends(get_analyses_collection),
):
    analyses = await get_analyses_by_user(analyses_col, user.id)
    return {"success": True, "analyses": [a.model_dump(by_alias=True, mode="json") for a in analyses]}


@app.get("/analysis/{analysis_id}")
async def get_analysis(
    analysis_id: str,
    user: UserPublic = Depends(get_current_user),
    analyses_col=Depends(get_analyses_collection),
):
    analysis = await get_analysis_by_id(analyses_col, analysis_id, user.id)
    if analysis is None:
        raise NotFoundError("Analysis not found")
    return {"success": True, "analysis": analysis.model_dump(by_alias=True, mode="json")}


@app.patch("/analysis/{analysis_id}/status")
async def set_analysis_status(
    analysis_id: str,
    body: StatusUpdate,
    user: UserPublic = Depends(get_current_user),
    analyses_col=Depends(get_analyses_collection),
):
    if not await update_analysis_status(analyses_col, analysis_id, body.status, user.id):
        raise NotFoundError("Analysis not found")
    return {"success": True, "message": "Analysis status updated", "status": body.status}


@app.delete("/analysis/{analysis_id}")
async def remove_analysis(
    analysis_id: str,
    user: UserPublic = Depends(get_current_user),
    analyses_col=Depends(get_analyses_collection),
):
    if not await delete_analysis(analyses_col, analysis_id, user.id):
        raise NotFoundError("Analysis not found or could not be deleted")
    return {"success": True, "message": "Analysis deleted successfully"}


@app.post("/analyze")
async def analyze(
    job_description: Optional[str] = Form(None, alias="jobDescription"),
    resumes: Optional[List[UploadFile]] = File(None),
):
    """Rank resumes without signing in or saving anything."""
    _validate_upload(job_description, resumes)
    pairs = await _read_files(resumes)
    candidates = run_pipeline(pairs, job_description)
    return {
        "success": True,
        "candidates": [c.model_dump(by_alias=True) for c in candidates],
        "statistics": compute_statistics(candidates).model_dump(by_alias=True),
    }
