"""
Text processing tools.

``transform_text`` applies a single transformation; ``analyze_text``
reports basic statistics.
"""

from pydantic import BaseModel, Field

from ..errors import ToolExecutionError
from .base import BaseTool, ToolArguments


def capitalize_words(text: str) -> str:
    """Uppercase the first letter of each whitespace-separated word."""
    return " ".join(word[:1].upper() + word[1:] for word in text.split())


TRANSFORMATIONS = {
    "uppercase": str.upper,
    "lowercase": str.lower,
    "reverse": lambda text: text[::-1],
    "capitalize": capitalize_words,
    "trim": str.strip,
}


class TextTransformRequest(ToolArguments):
    text: str = Field(description="The text to transform")
    operation: str = Field(
        description="The transformation to apply",
        json_schema_extra={"enum": list(TRANSFORMATIONS)},
    )


class TextResponse(BaseModel):
    result: str


class TextAnalysisRequest(ToolArguments):
    text: str = Field(description="The text to analyze")


class TextAnalysisResponse(BaseModel):
    word_count: int
    character_count: int
    line_count: int
    has_uppercase: bool
    has_lowercase: bool
    has_numbers: bool


class TransformTextTool(BaseTool):

    @property
    def name(self) -> str:
        return "transform_text"

    @property
    def description(self) -> str:
        return "Transform text using various operations"

    @property
    def arguments_model(self):
        return TextTransformRequest

    def execute(self, request: TextTransformRequest) -> TextResponse:
        transform = TRANSFORMATIONS.get(request.operation)
        if transform is None:
            raise ToolExecutionError(f"Unsupported transformation: {request.operation}")
        return TextResponse(result=transform(request.text))


class AnalyzeTextTool(BaseTool):

    @property
    def name(self) -> str:
        return "analyze_text"

    @property
    def description(self) -> str:
        return "Analyze text and provide statistics"

    @property
    def arguments_model(self):
        return TextAnalysisRequest

    def execute(self, request: TextAnalysisRequest) -> TextAnalysisResponse:
        text = request.text
        return TextAnalysisResponse(
            word_count=len(text.split()),
            character_count=len(text),
            line_count=len(text.splitlines()),
            has_uppercase=any(c.isupper() for c in text),
            has_lowercase=any(c.islower() for c in text),
            has_numbers=any(c.isnumeric() for c in text),
        )
