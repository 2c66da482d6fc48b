import fitz  # PyMuPDF
import logging
import os
import re
import time
import uuid
from contextlib import contextmanager
from typing import Iterator, Tuple

from pdfquiz.errors import UnreadablePdf

logger = logging.getLogger(__name__)


def make_upload_id(filename: str) -> str:
    """Opaque identifier for an upload: `<epoch-millis>-<token>-<safe filename>`."""
    base_name = os.path.basename(filename or "") or "upload.pdf"
    safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", base_name)
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{safe_name}"


@contextmanager
def stored_upload(content: bytes, upload_id: str, upload_dir: str) -> Iterator[str]:
    """
    Write the uploaded bytes to `upload_dir` and yield the file path.

    The file is removed when the block exits, whether extraction succeeded
    or raised.
    """
    os.makedirs(upload_dir, exist_ok=True)
    file_path = os.path.join(upload_dir, upload_id)
    try:
        with open(file_path, "wb") as f:
            f.write(content)
        yield file_path
    finally:
        if os.path.exists(file_path):
            os.remove(file_path)
            logger.debug(f"Removed temporary upload {upload_id}")


def extract_text_from_pdf(file_path: str) -> str:
    try:
        doc = fitz.open(file_path, filetype="pdf")
    except Exception as e:
        logger.error(f"❌ Could not open PDF {os.path.basename(file_path)}: {e}")
        raise UnreadablePdf() from e

    with doc:
        if doc.needs_pass:
            logger.error(f"❌ PDF {os.path.basename(file_path)} is encrypted")
            raise UnreadablePdf()
        page_count = doc.page_count
        if page_count == 0:
            # MuPDF repairs some garbage into an empty document instead of failing
            logger.error(f"❌ PDF {os.path.basename(file_path)} has no pages")
            raise UnreadablePdf()
        try:
            text = ""
            for page in doc:
                text += page.get_text()
        except Exception as e:
            logger.error(f"❌ Failed while reading pages of {os.path.basename(file_path)}: {e}")
            raise UnreadablePdf() from e

    logger.info(f"Extracted {len(text)} characters from {page_count} page(s)")
    return text


def extract_text_from_upload(content: bytes, filename: str, upload_dir: str) -> Tuple[str, str]:
    """Store the upload, extract its text and clean up. Returns (upload_id, text)."""
    upload_id = make_upload_id(filename)
    with stored_upload(content, upload_id, upload_dir) as file_path:
        text = extract_text_from_pdf(file_path)
    return upload_id, text
