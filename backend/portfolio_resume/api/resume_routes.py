from fastapi import APIRouter, Depends
from fastapi.responses import Response
import base64
import logging

from portfolio_resume.exceptions import InputError
from portfolio_resume.models.resume_models import (
    GenerateResumeRequest,
    ModifyResumeRequest,
    RenderRequest,
    ResumeDocumentResponse,
)
from portfolio_resume.services.llm_service import LLMSelection
from portfolio_resume.services.resume_pipeline import (
    ResumeDocument,
    generate_resume,
    modify_resume,
    render_document,
)
from portfolio_resume.utils.dependencies import get_llm_selection

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(result: ResumeDocument, suffix: str) -> ResumeDocumentResponse:
    return ResumeDocumentResponse(
        pdf=base64.b64encode(result.document).decode("ascii"),
        resume_data=result.resume,
        format=result.format,
        file_name=result.file_name(suffix),
    )


@router.post("/generate-resume", response_model=ResumeDocumentResponse)
async def generate_resume_endpoint(
    req: GenerateResumeRequest,
    llm: LLMSelection = Depends(get_llm_selection),
):
    """Scrape a portfolio URL and build a resume document from it."""
    result = await generate_resume(req.url, llm, mode=req.mode, output_format=req.format)
    return _to_response(result, "resume")


@router.post("/modify-resume", response_model=ResumeDocumentResponse)
async def modify_resume_endpoint(
    req: ModifyResumeRequest,
    llm: LLMSelection = Depends(get_llm_selection),
):
    """Apply a free-text edit to a resume and re-render it."""
    result = await modify_resume(req.resume_data, req.modification, llm, output_format=req.format)
    return _to_response(result, "resume-modified")


@router.post("/render")
async def render_resume_endpoint(req: RenderRequest):
    """Render a resume as a downloadable file, no model call."""
    if req.resume_data is None:
        raise InputError("Resume data is required")

    result = await render_document(req.resume_data, req.format)
    return Response(
        content=result.document,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.file_name()}"'},
    )
