"""Todo CRUD 路由测试

测试内容：
1. GET /todos 最新在前
2. POST /todos 创建（含 text 废弃别名、标题校验）
3. PUT /todos/{id} 部分更新 + 404
4. DELETE /todos/{id} + 404
"""

from httpx import AsyncClient


class TestListTodos:
    async def test_list_newest_first(self, client: AsyncClient):
        resp = await client.get("/todos")
        assert resp.status_code == 200
        data = resp.json()
        assert [t["id"] for t in data] == ["t1", "t2", "t3"]
        assert set(data[0]) == {"id", "title", "description", "completed", "created_at"}


class TestCreateTodo:
    async def test_create(self, client: AsyncClient):
        resp = await client.post(
            "/todos",
            json={"title": "  Water plants ", "description": "balcony"},
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["title"] == "Water plants"
        assert data["description"] == "balcony"
        assert data["completed"] is False
        assert len(data["id"]) == 26

        listed = (await client.get("/todos")).json()
        assert listed[0]["id"] == data["id"]

    async def test_create_with_legacy_text(self, client: AsyncClient):
        resp = await client.post("/todos", json={"text": "Legacy client"})
        assert resp.status_code == 201
        data = resp.json()
        assert data["title"] == "Legacy client"
        assert "text" not in data

    async def test_blank_title_with_legacy_text(self, client: AsyncClient):
        resp = await client.post("/todos", json={"title": "  ", "text": "Buy"})
        assert resp.status_code == 201
        assert resp.json()["title"] == "Buy"

    async def test_blank_title_rejected(self, client: AsyncClient):
        resp = await client.post("/todos", json={"title": "   "})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Title is required", "code": "TITLE_REQUIRED"}

    async def test_missing_title_rejected(self, client: AsyncClient):
        resp = await client.post("/todos", json={"description": "no title"})
        assert resp.status_code == 400
        assert resp.json()["code"] == "TITLE_REQUIRED"


class TestUpdateTodo:
    async def test_toggle_completed(self, client: AsyncClient):
        resp = await client.put("/todos/t1", json={"completed": True})
        assert resp.status_code == 200
        data = resp.json()
        assert data["completed"] is True
        assert data["title"] == "Buy milk"

    async def test_rename(self, client: AsyncClient):
        resp = await client.put("/todos/t2", json={"title": "Ship hotfix"})
        assert resp.status_code == 200
        assert resp.json()["title"] == "Ship hotfix"
        assert resp.json()["description"] == "v2.1 to prod"

    async def test_unknown_id(self, client: AsyncClient):
        resp = await client.put("/todos/missing", json={"completed": True})
        assert resp.status_code == 404
        assert resp.json()["code"] == "TODO_NOT_FOUND"

    async def test_blank_title_rejected(self, client: AsyncClient):
        resp = await client.put("/todos/t1", json={"title": ""})
        assert resp.status_code == 400
        assert resp.json()["code"] == "TITLE_REQUIRED"


class TestDeleteTodo:
    async def test_delete(self, client: AsyncClient):
        resp = await client.delete("/todos/t1")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Todo deleted successfully"}

        listed = (await client.get("/todos")).json()
        assert "t1" not in [t["id"] for t in listed]

    async def test_unknown_id(self, client: AsyncClient):
        resp = await client.delete("/todos/missing")
        assert resp.status_code == 404
        assert resp.json()["code"] == "TODO_NOT_FOUND"
