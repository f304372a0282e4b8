"""统一响应编码

所有响应均为 JSON：错误统一为 {"error": "<消息>"}，204 不写响应体。
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def json_response(status_code: int, payload: Any) -> Response:
    """按状态码输出 JSON，204 不写响应体"""
    if status_code == 204:
        return no_content()
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload))


def error_response(status_code: int, message: str) -> Response:
    """输出错误响应 {"error": message}"""
    return json_response(status_code, {"error": message})


def no_content() -> Response:
    return Response(status_code=204)


def describe_validation_error(exc: RequestValidationError) -> str:
    """
    将 FastAPI 的校验错误转换为可读消息

    Args:
        exc: 请求校验异常

    Returns:
        str: 面向客户端的错误消息
    """
    errors = exc.errors()
    for error in errors:
        loc = error.get("loc", ())
        if loc and loc[0] in ("path", "query"):
            return "Invalid task ID"

    for error in errors:
        if error.get("type") == "json_invalid":
            reason = (error.get("ctx") or {}).get("error", error.get("msg", ""))
            return f"Invalid JSON: {reason}"
        if error.get("type") == "missing" and tuple(error.get("loc", ())) == ("body",):
            return "Invalid JSON: request body is empty"

    details = []
    for error in errors:
        field = ".".join(str(part) for part in error.get("loc", ())[1:]) or "body"
        details.append(f"{field}: {error.get('msg')}")
    return "Invalid task payload: " + "; ".join(details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
    message = describe_validation_error(exc)
    logger.info(f"请求校验失败: {request.method} {request.url.path} - {message}")
    return error_response(400, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    logger.error(f"未处理的异常: {request.method} {request.url.path} - {exc}", exc_info=exc)
    return error_response(500, "Internal Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器，保证错误响应格式统一"""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
