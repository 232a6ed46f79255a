"""
================================================================================
Demo Posts API
================================================================================

Small FastAPI service exercised by the API test suites.

Endpoints:
    - GET  /health       -> 200 {"status": "ok"}
    - GET  /posts/{id}   -> 400 for id <= 0, 404 unless id == 1, else the demo post
    - POST /posts        -> 201 with the echoed fields plus id=1

Request problems are reported the way an MVC-style API does it: malformed or
invalid input is 400 (never 422) and a non-JSON body is 415.

================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError


DEMO_POST: Dict[str, Any] = {
    "id": 1,
    "title": "demo title",
    "body": "demo body",
    "userId": 1,
}

CREATED_POST_ID = 1


class PostRequest(BaseModel):
    """Body accepted by POST /posts. Missing fields take their defaults."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    body: str = ""
    user_id: int = Field(0, alias="userId")


def problem_response(
    status: int,
    title: str,
    detail: str = "",
    errors: Optional[List[Dict[str, Any]]] = None,
) -> JSONResponse:
    """Build an RFC 7807 style error response."""
    content: Dict[str, Any] = {"title": title, "status": status}
    if detail:
        content["detail"] = detail
    if errors:
        content["errors"] = errors
    return JSONResponse(
        status_code=status,
        content=content,
        media_type="application/problem+json",
    )


def _summarize(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # pydantic error dicts may carry exception objects in "ctx"
    return [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in errors
    ]


def _is_json_media_type(content_type: str) -> bool:
    media_type = content_type.split(";")[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return problem_response(
        400,
        "One or more validation errors occurred.",
        errors=_summarize(list(exc.errors())),
    )


def create_app() -> FastAPI:
    """Create the demo API application."""
    app = FastAPI(title="Demo Posts API", version="1.0.0")
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/posts/{post_id}")
    async def get_post(post_id: int):
        if post_id <= 0:
            return problem_response(400, "Bad Request", f"Post id must be positive, got {post_id}")
        if post_id != DEMO_POST["id"]:
            return problem_response(404, "Not Found", f"Post {post_id} does not exist")
        return DEMO_POST

    @app.post("/posts")
    async def create_post(request: Request) -> JSONResponse:
        content_type = request.headers.get("content-type", "")
        if not _is_json_media_type(content_type):
            return problem_response(
                415,
                "Unsupported Media Type",
                f"Expected application/json, got {content_type or 'no content type'}",
            )

        raw = await request.body()
        try:
            post = PostRequest.model_validate_json(raw)
        except ValidationError as e:
            logger.debug(f"Rejected POST /posts body: {e.error_count()} error(s)")
            return problem_response(
                400,
                "One or more validation errors occurred.",
                errors=_summarize(e.errors()),
            )

        created = {
            "id": CREATED_POST_ID,
            "title": post.title,
            "body": post.body,
            "userId": post.user_id,
        }
        return JSONResponse(
            status_code=201,
            content=created,
            headers={"Location": f"/posts/{CREATED_POST_ID}"},
        )

    return app


__all__ = [
    "DEMO_POST",
    "PostRequest",
    "create_app",
    "problem_response",
]
