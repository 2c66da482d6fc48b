import json

import fitz  # PyMuPDF
import httpx
import pytest

from pdfquiz.services import gemini_client

TEST_API_KEY = "test-gemini-key"

SAMPLE_QUIZ = {
    "mcq": [
        {
            "question": f"Question {i}: what colour is the sky?",
            "options": ["Blue", "Green", "Red", "Yellow"],
            "correctAnswer": "Blue",
        }
        for i in range(1, 6)
    ],
    "trueFalse": [
        {"question": "The sky is blue.", "correctAnswer": True},
        {"question": "The sky is green.", "correctAnswer": False},
        {"question": "The text mentions the sky.", "correctAnswer": True},
    ],
    "fillInTheBlank": [
        {"question": "The sky is _____.", "correctAnswer": "blue"},
        {"question": "The _____ is blue.", "correctAnswer": "sky"},
    ],
}


def make_pdf_bytes(text: str, **save_options) -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text)
    data = doc.tobytes(**save_options)
    doc.close()
    return data


def gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def quiz_completion(quiz: dict = SAMPLE_QUIZ) -> str:
    return "Here is your quiz:\n```json\n" + json.dumps(quiz, indent=2) + "\n```\nGood luck!"


class RecordingHandler:
    """httpx.MockTransport handler that replays queued responses and records requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture(autouse=True)
def no_retry_backoff(monkeypatch):
    monkeypatch.setattr(gemini_client, "RETRY_BACKOFF_SECONDS", 0)


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def sky_pdf():
    return make_pdf_bytes("The sky is blue.")


@pytest.fixture
def make_pdf():
    return make_pdf_bytes


@pytest.fixture
def sample_quiz():
    return json.loads(json.dumps(SAMPLE_QUIZ))


@pytest.fixture
def gemini_response():
    """Build a 200 response carrying `text` as the completion."""
    def _make(text=None, status_code=200):
        return httpx.Response(status_code, json=gemini_body(quiz_completion() if text is None else text))
    return _make


@pytest.fixture
def recording_handler():
    return RecordingHandler


@pytest.fixture
def make_client():
    def _make(handler, api_key=TEST_API_KEY, **kwargs):
        return gemini_client.GeminiQuizClient(
            api_key=api_key,
            model="gemini-test",
            base_url="https://gemini.test/v1beta",
            transport=httpx.MockTransport(handler),
            **kwargs,
        )
    return _make
