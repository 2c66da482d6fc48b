from fastapi import APIRouter, Depends, File, UploadFile

from pdfquiz import config
from pdfquiz.errors import NoFileProvided
from pdfquiz.schemas.pdf_quiz import (
    ApiKeyStatus,
    ErrorResponse,
    GenerateQuizRequest,
    Quiz,
    UploadResponse,
)
from pdfquiz.services.gemini_client import GeminiQuizClient
from pdfquiz.services.quiz_pipeline import QuizPipeline

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def get_quiz_pipeline() -> QuizPipeline:
    client = GeminiQuizClient(api_key=config.GEMINI_API_KEY)
    return QuizPipeline(client=client, upload_dir=config.UPLOAD_DIR)


@router.get(
    "/check-api-key",
    response_model=ApiKeyStatus,
    summary="Report whether the Gemini API key is configured",
)
async def check_api_key(pipeline: QuizPipeline = Depends(get_quiz_pipeline)):
    return ApiKeyStatus(configured=pipeline.check_credential())


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses=ERROR_RESPONSES,
    summary="Upload a PDF and extract its text",
    description="Accepts a single PDF in the `pdf` form field, extracts its text with PyMuPDF and returns it together with an identifier for the upload. The uploaded file is deleted once extraction finishes, whether or not it succeeded.",
)
async def upload_pdf(pdf: UploadFile = File(None), pipeline: QuizPipeline = Depends(get_quiz_pipeline)):
    if pdf is None:
        raise NoFileProvided()

    content = await pdf.read()
    result = await pipeline.extract(content, pdf.filename, pdf.content_type)
    return UploadResponse(filename=result.upload_id, extracted_text=result.text)


@router.post(
    "/generate-quiz",
    response_model=Quiz,
    responses=ERROR_RESPONSES,
    summary="Generate a quiz from extracted text",
    description="Sends the first 5000 characters of `text` to Gemini and returns 5 multiple-choice, 3 true/false and 2 fill-in-the-blank questions parsed from the completion.",
)
async def generate_quiz(request: GenerateQuizRequest, pipeline: QuizPipeline = Depends(get_quiz_pipeline)):
    return await pipeline.generate_quiz(request.text)
