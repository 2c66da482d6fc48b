"""
PDF to quiz pipeline.

Sequences the individual stages for the two request operations:

- extract: uploaded bytes -> scoped temp file -> PyMuPDF text
- generate_quiz: text -> prompt -> Gemini completion -> parsed Quiz

Nothing is kept between calls; each request builds on its own inputs only.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from pdfquiz.errors import NoFileProvided, NoTextProvided, UnsupportedMediaType
from pdfquiz.schemas.pdf_quiz import Quiz
from pdfquiz.services.gemini_client import GeminiQuizClient
from pdfquiz.services.pdf_parser import extract_text_from_upload
from pdfquiz.services.prompts.quiz import build_quiz_prompt
from pdfquiz.services.quiz_parser import parse_quiz_from_response

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
LOGGED_COMPLETION_CHARS = 200


@dataclass
class ExtractionResult:
    upload_id: str
    text: str


class QuizPipeline:
    def __init__(self, client: GeminiQuizClient, upload_dir: str):
        self.client = client
        self.upload_dir = upload_dir

    def check_credential(self) -> bool:
        return self.client.is_configured

    async def extract(self, content: Optional[bytes], filename: Optional[str], content_type: Optional[str]) -> ExtractionResult:
        if content is None:
            raise NoFileProvided()
        # Media type is checked before anything touches the disk
        if (content_type or "").split(";")[0].strip().lower() != PDF_MEDIA_TYPE:
            logger.warning(f"Rejected upload {filename!r} with media type {content_type!r}")
            raise UnsupportedMediaType()

        upload_id, text = await run_in_threadpool(extract_text_from_upload, content, filename, self.upload_dir)
        return ExtractionResult(upload_id=upload_id, text=text)

    async def generate_quiz(self, text: Optional[str]) -> Quiz:
        if not text:
            raise NoTextProvided()

        prompt = build_quiz_prompt(text)
        completion = await self.client.generate(prompt)
        logger.info(f"🧠 Generated content: {completion[:LOGGED_COMPLETION_CHARS]}...")

        quiz = parse_quiz_from_response(completion)
        for warning in quiz.shape_warnings():
            logger.warning(f"Quiz shape: {warning}")
        return quiz
