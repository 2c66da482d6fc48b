MAX_SOURCE_TEXT_CHARS = 5000

QUIZ_JSON_SCHEMA = """{
  "mcq": [
    {
      "question": "Question text",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correctAnswer": "Correct option"
    }
  ],
  "trueFalse": [
    {
      "question": "Question text",
      "correctAnswer": true/false
    }
  ],
  "fillInTheBlank": [
    {
      "question": "Question text with _____ for the blank",
      "correctAnswer": "Answer for the blank"
    }
  ]
}"""


def build_quiz_prompt(text: str) -> str:
    """Only the first MAX_SOURCE_TEXT_CHARS characters of `text` are embedded."""
    source_text = text[:MAX_SOURCE_TEXT_CHARS]
    return f"""Generate a quiz based on the following text. Create 5 multiple-choice questions (MCQs), 3 true/false questions, and 2 fill-in-the-blank questions. Format the response as a JSON object with the following structure:
{QUIZ_JSON_SCHEMA}

Each multiple-choice question must have exactly 4 options and its correctAnswer must be one of them.

Here is the text to base the quiz on: {source_text}"""
