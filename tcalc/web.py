"""
HTTP endpoint for evaluating expressions.

Run with: uvicorn tcalc.web:app
"""

import logging

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from tcalc.core import evaluate
from tcalc.errors import TcalcError
from tcalc.formatter import format_value

logger = logging.getLogger(__name__)

app = FastAPI(title="tcalc", description="Date/time arithmetic expressions")


class EvaluateResponse(BaseModel):
    expression: str
    result: str
    kind: str


@app.get("/evaluate", response_model=EvaluateResponse)
def evaluate_expression(
    expression: str = Query(..., description="Expression such as '2am + 30m'"),
) -> EvaluateResponse:
    """
    Evaluate an expression against the server clock.

    Raises:
        HTTPException: 400 with the error message if the expression is invalid
    """
    try:
        value = evaluate(expression)
    except TcalcError as e:
        logger.info("rejected expression %r: %s", expression, e)
        raise HTTPException(status_code=400, detail=str(e)) from e

    return EvaluateResponse(
        expression=expression, result=format_value(value), kind=str(value.kind)
    )
