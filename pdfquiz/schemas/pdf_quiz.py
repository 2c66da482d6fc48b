# pdfquiz/schemas/pdf_quiz.py

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

# Counts requested from the model; not enforced on the parsed result
REQUESTED_MCQ_COUNT = 5
REQUESTED_TRUE_FALSE_COUNT = 3
REQUESTED_FILL_IN_THE_BLANK_COUNT = 2
MCQ_OPTION_COUNT = 4


class MultipleChoiceQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    question: str
    options: List[str]
    correct_answer: str = Field(alias="correctAnswer")


class TrueFalseQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str
    correct_answer: bool = Field(alias="correctAnswer")


class FillInTheBlankQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    question: str
    correct_answer: str = Field(alias="correctAnswer")


class Quiz(BaseModel):
    """
    Structured quiz parsed from a Gemini completion.

    Field aliases match the JSON keys requested in the prompt, so a parsed
    quiz serializes back to exactly the shape the frontend renders.
    """
    model_config = ConfigDict(populate_by_name=True)

    mcq: List[MultipleChoiceQuestion] = Field(default_factory=list)
    true_false: List[TrueFalseQuestion] = Field(default_factory=list, alias="trueFalse")
    fill_in_the_blank: List[FillInTheBlankQuestion] = Field(default_factory=list, alias="fillInTheBlank")

    def shape_warnings(self) -> List[str]:
        """Describe where the quiz deviates from what the prompt asked for."""
        warnings = []
        expected = [
            ("mcq", self.mcq, REQUESTED_MCQ_COUNT),
            ("trueFalse", self.true_false, REQUESTED_TRUE_FALSE_COUNT),
            ("fillInTheBlank", self.fill_in_the_blank, REQUESTED_FILL_IN_THE_BLANK_COUNT),
        ]
        for name, items, count in expected:
            if len(items) != count:
                warnings.append(f"expected {count} {name} questions, got {len(items)}")

        for index, item in enumerate(self.mcq):
            if len(item.options) != MCQ_OPTION_COUNT:
                warnings.append(f"mcq[{index}] has {len(item.options)} options instead of {MCQ_OPTION_COUNT}")
            if item.correct_answer not in item.options:
                warnings.append(f"mcq[{index}] correct answer is not one of its options")
        return warnings


class GenerateQuizRequest(BaseModel):
    text: Optional[str] = None


class UploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "PDF uploaded and text extracted successfully"
    filename: str
    extracted_text: str = Field(alias="extractedText")


class ApiKeyStatus(BaseModel):
    configured: bool


class ErrorResponse(BaseModel):
    error: str
