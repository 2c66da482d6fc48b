"""
Error taxonomy for the PDF quiz pipeline.

Every failure the pipeline can produce is one of these exceptions. Each carries
the sanitized message returned to the caller and the HTTP status it maps to;
diagnostic detail stays in the server log.
"""


class QuizPipelineError(Exception):
    """Base class for every caller-facing pipeline failure."""

    status_code: int = 500
    message: str = "Error generating quiz"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# Input errors (client caused)

class NoFileProvided(QuizPipelineError):
    status_code = 400
    message = "No file uploaded"


class UnsupportedMediaType(QuizPipelineError):
    status_code = 400
    message = "Only PDF files are allowed"


class UnreadablePdf(QuizPipelineError):
    status_code = 422
    message = "Error processing PDF"


class NoTextProvided(QuizPipelineError):
    status_code = 400
    message = "No text provided"


# Service errors

class ServiceUnauthenticated(QuizPipelineError):
    message = "API key not properly configured. Please add your Gemini API key to the .env file."


class ServiceCallFailed(QuizPipelineError):
    status_code = 502
    message = "Error calling Gemini API"


class UnexpectedServiceShape(QuizPipelineError):
    status_code = 502
    message = "Unexpected API response structure"


class NoJsonFound(QuizPipelineError):
    message = "No JSON object found in the API response"


class MalformedJson(QuizPipelineError):
    message = "Failed to parse quiz data from API response"
