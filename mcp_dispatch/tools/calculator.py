"""Calculator tool: the four basic arithmetic operations."""

import math
import operator

from pydantic import BaseModel, Field

from ..errors import ToolExecutionError
from .base import BaseTool, ToolArguments

OPERATIONS = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": operator.truediv,
}


class CalculatorRequest(ToolArguments):
    operation: str = Field(
        description="The operation to perform",
        json_schema_extra={"enum": list(OPERATIONS)},
    )
    a: float = Field(description="First number")
    b: float = Field(description="Second number")


class CalculatorResponse(BaseModel):
    result: float
    operation_performed: str


class CalculatorTool(BaseTool):

    @property
    def name(self) -> str:
        return "calculator"

    @property
    def description(self) -> str:
        return "Perform basic arithmetic operations (add, subtract, multiply, divide)"

    @property
    def arguments_model(self):
        return CalculatorRequest

    def execute(self, request: CalculatorRequest) -> CalculatorResponse:
        func = OPERATIONS.get(request.operation)
        if func is None:
            raise ToolExecutionError(f"Unsupported operation: {request.operation}")
        if request.operation == "divide" and request.b == 0:
            raise ToolExecutionError("Division by zero is not allowed")

        result = func(request.a, request.b)
        if not math.isfinite(result):
            raise ToolExecutionError(
                f"Result of {request.operation} is out of range: {result}"
            )

        return CalculatorResponse(
            result=result,
            operation_performed=f"{request.a:g} {request.operation} {request.b:g}",
        )
