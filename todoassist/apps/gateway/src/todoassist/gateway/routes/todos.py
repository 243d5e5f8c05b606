"""Todo CRUD 路由

GET /todos: 全部 todo，最新在前。
POST /todos: 创建 todo（title 必填；text 为废弃别名）。
PUT /todos/{todo_id}: 更新字段子集。
DELETE /todos/{todo_id}: 删除 todo。
"""

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse
from todoassist.core.models import Todo, TodoCreate, TodoUpdate

from ..deps import get_todo_service
from ..services.todo_service import TitleRequiredError, TodoService

router = APIRouter()


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "code": code},
    )


def _not_found(todo_id: str) -> JSONResponse:
    return _error_response(404, "TODO_NOT_FOUND", f"Todo with id {todo_id} does not exist")


@router.get("/todos", response_model=list[Todo])
async def list_todos(service: TodoService = Depends(get_todo_service)):
    return await service.list_todos()


@router.post("/todos", response_model=Todo, status_code=201)
async def create_todo(
    body: TodoCreate,
    service: TodoService = Depends(get_todo_service),
):
    try:
        return await service.create_todo(body)
    except TitleRequiredError as e:
        return _error_response(400, "TITLE_REQUIRED", str(e))


@router.put("/todos/{todo_id}", response_model=Todo)
async def update_todo(
    todo_id: str,
    body: TodoUpdate,
    service: TodoService = Depends(get_todo_service),
):
    try:
        todo = await service.update_todo(todo_id, body)
    except TitleRequiredError as e:
        return _error_response(400, "TITLE_REQUIRED", str(e))
    if todo is None:
        return _not_found(todo_id)
    return todo


@router.delete("/todos/{todo_id}")
async def delete_todo(
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
):
    if not await service.delete_todo(todo_id):
        return _not_found(todo_id)
    return {"message": "Todo deleted successfully"}
