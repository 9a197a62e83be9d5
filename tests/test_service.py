import pytest

from todo_board.errors import NotFoundError
from todo_board.models import TodoStatus
from todo_board.schemas import (
    CreateTodoInput,
    DeleteTodoInput,
    UpdateTodoStatusInput,
    UpdateTodoTitleInput,
)


def make(service, title="Test Todo"):
    return service.create(CreateTodoInput(title=title))


class TestCreate:
    def test_defaults(self, service):
        todo = make(service)
        assert todo.title == "Test Todo"
        assert todo.status == TodoStatus.ACTIVE
        assert todo.id > 0
        assert todo.created_at == todo.updated_at

    def test_fresh_ids(self, service):
        ids = {make(service, f"T{i}").id for i in range(5)}
        assert len(ids) == 5

    def test_duplicate_titles_allowed(self, service):
        a = make(service, "Same")
        b = make(service, "Same")
        assert a.id != b.id

    def test_ids_not_reused_after_delete(self, service):
        first = make(service, "first")
        service.delete(DeleteTodoInput(id=first.id))
        second = make(service, "second")
        assert second.id > first.id


class TestList:
    def test_empty(self, service):
        assert service.list() == []

    def test_newest_first(self, service):
        created = [make(service, f"T{i}") for i in range(3)]
        listed = service.list()
        assert [t.id for t in listed] == [t.id for t in reversed(created)]
        assert [t.created_at for t in listed] == sorted((t.created_at for t in listed), reverse=True)

    def test_created_todos_listed_until_deleted(self, service):
        keep = make(service, "keep")
        drop = make(service, "drop")
        assert {t.id for t in service.list()} == {keep.id, drop.id}
        service.delete(DeleteTodoInput(id=drop.id))
        assert [t.id for t in service.list()] == [keep.id]

    def test_three_statuses(self, service):
        for status in TodoStatus:
            todo = make(service, status.value)
            service.update_status(UpdateTodoStatusInput(id=todo.id, status=status))
        listed = service.list()
        assert len(listed) == 3
        assert {t.status for t in listed} == set(TodoStatus)


class TestUpdateTitle:
    def test_changes_only_title_and_updated_at(self, service):
        todo = make(service, "before")
        service.update_status(UpdateTodoStatusInput(id=todo.id, status=TodoStatus.IN_PROGRESS))
        current = service.list()[0]

        updated = service.update_title(UpdateTodoTitleInput(id=todo.id, title="after"))
        assert updated.title == "after"
        assert updated.status == TodoStatus.IN_PROGRESS
        assert updated.created_at == current.created_at
        assert updated.updated_at > current.updated_at

    def test_not_found(self, service):
        with pytest.raises(NotFoundError) as excinfo:
            service.update_title(UpdateTodoTitleInput(id=999, title="x"))
        assert excinfo.value.todo_id == 999
        assert "999" in str(excinfo.value)


class TestUpdateStatus:
    def test_changes_only_status_and_updated_at(self, service):
        todo = make(service)
        updated = service.update_status(UpdateTodoStatusInput(id=todo.id, status=TodoStatus.DONE))
        assert updated.status == TodoStatus.DONE
        assert updated.title == todo.title
        assert updated.created_at == todo.created_at
        assert updated.updated_at > todo.updated_at

    def test_same_status_still_refreshes_updated_at(self, service):
        todo = make(service)
        updated = service.update_status(UpdateTodoStatusInput(id=todo.id, status=TodoStatus.ACTIVE))
        assert updated.status == TodoStatus.ACTIVE
        assert updated.updated_at > todo.updated_at

    def test_any_transition_allowed(self, service):
        todo = make(service)
        for status in (TodoStatus.DONE, TodoStatus.ACTIVE, TodoStatus.IN_PROGRESS, TodoStatus.DONE):
            assert service.update_status(UpdateTodoStatusInput(id=todo.id, status=status)).status == status

    def test_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.update_status(UpdateTodoStatusInput(id=12345, status=TodoStatus.DONE))


class TestDelete:
    def test_scenario(self, service):
        todo = make(service)
        assert todo.status == TodoStatus.ACTIVE
        done = service.update_status(UpdateTodoStatusInput(id=todo.id, status=TodoStatus.DONE))
        assert done.updated_at > todo.updated_at
        assert service.delete(DeleteTodoInput(id=todo.id)).success is True
        assert todo.id not in [t.id for t in service.list()]

    def test_missing_id_is_not_an_error(self, service):
        assert service.delete(DeleteTodoInput(id=999)).success is False
