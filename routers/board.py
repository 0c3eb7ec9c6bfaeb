# routers/board.py
import math
from typing import Callable

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from fastapi.encoders import jsonable_encoder
from fastapi.routing import APIRoute

from schemas.board import (
    ERROR_422,
    CheckPasswordRequest,
    DeleteRequest,
    DetailRequest,
    InsertRequest,
    ListRequest,
    ListResponse,
    ResultResponse,
    UpdateRequest,
)
from services.board_service import BoardService, ServiceResult
from utils.logger import RequestLogger


def logged_route_class(interceptor: RequestLogger) -> type[APIRoute]:
    """APIRoute that calls the interceptor before/after each dispatch."""

    class LoggedRoute(APIRoute):
        def get_route_handler(self) -> Callable:
            original = super().get_route_handler()

            async def handler(request: Request) -> Response:
                started = interceptor.before(request)
                try:
                    response = await original(request)
                except Exception as exc:
                    interceptor.on_error(request, exc, started)
                    raise
                interceptor.after(request, response, started)
                return response

            return handler

    return LoggedRoute


def _send(result: ServiceResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=jsonable_encoder(result.body()))


def build_board_router(service: BoardService, interceptor: RequestLogger) -> APIRouter:
    router = APIRouter(tags=["Board"], route_class=logged_route_class(interceptor))

    @router.post("/list", summary="게시판 목록 조회", response_model=ListResponse,
                 description="- 게시판 목록을 조회합니다. (id 내림차순, 검색어는 제목/내용/작성자)")
    async def board_list(body: ListRequest):
        total_count = await service.get_total_count(body.search)
        rows = await service.get_list(body.pageNum, body.rowsPerPage, body.search)
        return JSONResponse(status_code=200, content=jsonable_encoder({
            "result": rows,
            "totalCount": total_count,
            "totalPages": math.ceil(total_count / body.rowsPerPage),
        }))

    @router.post("/detail", summary="게시판 상세 조회", response_model=ResultResponse,
                 responses=ERROR_422,
                 description="- id를 통해 해당 게시판의 상세 내용을 조회합니다.")
    async def board_detail(body: DetailRequest):
        return _send(await service.get_detail(body.id))

    @router.post("/insert", summary="게시판 등록", status_code=201, response_model=ResultResponse,
                 description="- 게시판을 등록합니다.")
    async def board_insert(body: InsertRequest):
        return _send(await service.insert_board(body.title, body.content, body.writer, body.password))

    @router.post("/checkPassword", summary="게시판 비밀번호 확인", response_model=ResultResponse,
                 responses={422: {"model": ResultResponse, "description": "password mismatch"}},
                 description="- 수정/삭제 전 비밀번호를 확인합니다.")
    async def board_check_password(body: CheckPasswordRequest):
        ok = await service.check_board_password(body.id, body.password)
        return JSONResponse(status_code=200 if ok else 422, content={"result": ok})

    @router.post("/delete", summary="게시판 삭제", response_model=ResultResponse,
                 responses=ERROR_422,
                 description="- 비밀번호가 일치하면 게시판을 삭제합니다.")
    async def board_delete(body: DeleteRequest):
        return _send(await service.delete_board(body.id, body.password))

    @router.post("/update", summary="게시판 수정", response_model=ResultResponse,
                 responses=ERROR_422,
                 description="- 비밀번호가 일치하면 제목/내용을 수정합니다. 제목 앞에 [edited] 가 한 번 붙습니다.")
    async def board_update(body: UpdateRequest):
        return _send(await service.update_board(body.id, body.title, body.content, body.password))

    return router
