"""Function Routes - HTTP 요청을 FunctionDispatcher로 위임"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from kosha_gateway.api.dependencies import get_dispatcher
from kosha_gateway.core.logging import logger
from kosha_gateway.engine.dispatcher import FunctionDispatcher
from kosha_gateway.schemas.law_schema import ErrorResponse, FunctionCallRequest

router = APIRouter(tags=["functions"])

ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 401, 403, 429, 500, 502, 503)
}


async def _dispatch(request: FunctionCallRequest, dispatcher: FunctionDispatcher) -> JSONResponse:
    logger.info(f"[API] Function call: {request.function_name}")
    result = await dispatcher.handle(request.function_name, request.arguments)
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.post("/api/v1/functions", responses=ERROR_RESPONSES)
async def call_function(
    request: FunctionCallRequest,
    dispatcher: FunctionDispatcher = Depends(get_dispatcher),
):
    """함수 호출 API

    Body:
        function_name: search_safety_law | summarize_law_snippets | generate_action_plan
        arguments: 함수 인자
    """
    return await _dispatch(request, dispatcher)


@router.post("/api", responses=ERROR_RESPONSES)
async def call_function_legacy(
    request: FunctionCallRequest,
    dispatcher: FunctionDispatcher = Depends(get_dispatcher),
):
    """단일 엔드포인트 호환용 (POST /api)"""
    return await _dispatch(request, dispatcher)
