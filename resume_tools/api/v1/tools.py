from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status

from resume_tools.core.config import settings
from resume_tools.core.errors import ResumeToolError
from resume_tools.core.rate_limit import rate_limit
from resume_tools.schemas.reports import ATSScore, KeywordAnalysis, OptimizationReport
from resume_tools.schemas.resume import StructuredDocument
from resume_tools.schemas.tools import (
    JobDescriptionRequest,
    OptimizeRequest,
    PdfRequest,
    ScoreRequest,
    TextRequest,
)
from resume_tools.services.tools_service import (
    extract_job_keywords,
    optimize_for_job,
    parse_document,
    parse_pdf,
    parse_upload,
    score_document,
    score_pdf,
)

router = APIRouter()

UPLOAD_CHUNK_BYTES = 1024 * 64


def _raise_tool_http_error(exc: ResumeToolError) -> None:
    raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.post("/tools/parse-resume", response_model=StructuredDocument)
@rate_limit()
async def tools_parse_resume(request: Request, payload: PdfRequest):
    _ = request
    try:
        return parse_pdf(payload.pdf)
    except ResumeToolError as exc:
        _raise_tool_http_error(exc)


@router.post("/tools/parse-resume/upload", response_model=StructuredDocument)
@rate_limit()
async def tools_parse_resume_upload(request: Request, file: UploadFile = File(...)):
    _ = request
    filename = file.filename or "uploaded-file"

    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Maximum allowed size is {settings.max_upload_bytes} bytes.",
            )
        chunks.append(chunk)

    try:
        return parse_upload(filename, b"".join(chunks))
    except ResumeToolError as exc:
        _raise_tool_http_error(exc)


@router.post("/tools/parse-text", response_model=StructuredDocument)
@rate_limit()
async def tools_parse_text(request: Request, payload: TextRequest):
    _ = request
    try:
        return parse_document(payload.text)
    except ResumeToolError as exc:
        _raise_tool_http_error(exc)


@router.post("/tools/score-ats", response_model=ATSScore)
@rate_limit()
async def tools_score_ats(request: Request, payload: ScoreRequest):
    _ = request
    try:
        if payload.pdf:
            return score_pdf(payload.pdf)
        return score_document(payload.text or "")
    except ResumeToolError as exc:
        _raise_tool_http_error(exc)


@router.post("/tools/extract-keywords", response_model=KeywordAnalysis)
@rate_limit()
async def tools_extract_keywords(request: Request, payload: JobDescriptionRequest):
    _ = request
    try:
        return extract_job_keywords(payload.job_description)
    except ResumeToolError as exc:
        _raise_tool_http_error(exc)


@router.post("/tools/optimize-for-job", response_model=OptimizationReport)
@rate_limit()
async def tools_optimize_for_job(request: Request, payload: OptimizeRequest):
    _ = request
    try:
        return optimize_for_job(payload.resume_data, payload.job_description)
    except ResumeToolError as exc:
        _raise_tool_http_error(exc)
