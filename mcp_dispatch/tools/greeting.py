"""Greeting tool."""

from pydantic import BaseModel, Field

from .base import BaseTool, ToolArguments

GREETINGS = {
    "en": "Hello, {name}! Welcome to the MCP server.",
    "es": "¡Hola, {name}! Bienvenido al servidor MCP.",
    "fr": "Bonjour, {name} ! Bienvenue sur le serveur MCP.",
    "de": "Hallo, {name}! Willkommen beim MCP-Server.",
}
DEFAULT_LANGUAGE = "en"


class GreetingRequest(ToolArguments):
    name: str = Field(description="The name of the person to greet")
    language: str = Field(
        DEFAULT_LANGUAGE,
        description="Language for the greeting (en, es, fr, de)",
        json_schema_extra={"enum": list(GREETINGS)},
    )


class GreetingResponse(BaseModel):
    message: str
    language: str


class GreetingTool(BaseTool):
    """Generate a personalized greeting. Unknown languages fall back to English."""

    @property
    def name(self) -> str:
        return "greeting"

    @property
    def description(self) -> str:
        return "Generate a personalized greeting message"

    @property
    def arguments_model(self):
        return GreetingRequest

    def execute(self, request: GreetingRequest) -> GreetingResponse:
        language = request.language if request.language in GREETINGS else DEFAULT_LANGUAGE
        return GreetingResponse(
            message=GREETINGS[language].format(name=request.name),
            language=language,
        )
