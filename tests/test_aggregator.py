"""Tests for routedoc.aggregator and routedoc.assembler."""

from __future__ import annotations

import pytest

from routedoc.aggregator import FileAggregator
from routedoc.assembler import assemble
from routedoc.errors import DuplicateApplicationError, MissingApplicationError
from routedoc.models import Action, Application, FileResult, Module, Route, TypeDef
from routedoc.resolver import attach


def _action(path: str, filename: str) -> Action:
    return Action(name=path.strip("/"), route=Route("GET", path), filename=filename)


def _app_file() -> FileResult:
    return FileResult(path="app.js", filename="app", application=Application(name="svc"))


def test_missing_application() -> None:
    with pytest.raises(MissingApplicationError):
        FileAggregator().aggregate([FileResult(path="a.js", filename="a")])


def test_duplicate_application_reports_second_file() -> None:
    results = [
        _app_file(),
        FileResult(path="other.js", filename="other", application=Application(name="again")),
    ]
    with pytest.raises(DuplicateApplicationError) as excinfo:
        FileAggregator().aggregate(results)
    assert excinfo.value.path == "other.js"
    assert "other.js" in str(excinfo.value)


def test_filename_fallback_attaches_sibling_actions_once() -> None:
    module = Module(name="users", path="/users", filename="users")
    listing = _action("/list", "users")
    detail = _action("/:id", "users")
    unrelated = _action("/ping", "health")
    users_file = FileResult(
        path="users.js", filename="users", modules=[module], actions=[listing, detail]
    )
    health_file = FileResult(path="health.js", filename="health", actions=[unrelated])

    result = FileAggregator().aggregate([_app_file(), users_file, health_file])

    assert list(module.actions) == [listing, detail]
    assert listing.route.path == "/users/list"
    assert detail.route.path == "/users/:id"
    assert result.unassociated == [unrelated]
    assert result.actions == [listing, detail, unrelated]


def test_structurally_attached_action_is_not_prefixed_again() -> None:
    module = Module(name="test", path="/test", filename="test")
    action = _action("/time", "test")
    attach(module, action)
    result = FileAggregator().aggregate(
        [_app_file(), FileResult(path="test.js", filename="test", modules=[module], actions=[action])]
    )
    assert list(module.actions) == [action]
    assert action.route.path == "/test/time"
    assert result.unassociated == []


def test_nested_action_stays_with_its_module_when_another_shares_the_filename() -> None:
    owner = Module(name="orders-a", path="/orders", filename="orders")
    other = Module(name="orders-b", path="/other", filename="orders")
    action = _action("/list", "orders")
    attach(owner, action)

    FileAggregator().aggregate(
        [
            _app_file(),
            FileResult(path="a/orders.js", filename="orders", modules=[owner], actions=[action]),
            FileResult(path="b/orders.js", filename="orders", modules=[other]),
        ]
    )

    assert list(owner.actions) == [action]
    assert list(other.actions) == []
    assert action.route.path == "/orders/list"


def test_fallback_gives_each_action_to_one_module_only() -> None:
    first = Module(name="a", path="/a", filename="shared")
    second = Module(name="b", path="/b", filename="shared")
    action = _action("/x", "shared")
    FileAggregator().aggregate(
        [
            _app_file(),
            FileResult(path="one/shared.js", filename="shared", modules=[first], actions=[action]),
            FileResult(path="two/shared.js", filename="shared", modules=[second]),
        ]
    )
    assert list(first.actions) == [action]
    assert list(second.actions) == []
    assert action.route.path == "/a/x"


def test_assemble_seals_modules_and_collects_typedefs() -> None:
    module = Module(name="m", filename="m")
    module.actions.append(_action("/x", "m"))
    typedef = TypeDef(name="User", kind="object")
    app_file = _app_file()
    app_file.typedefs["User"] = typedef
    result = FileAggregator().aggregate(
        [app_file, FileResult(path="m.js", filename="m", modules=[module])]
    )

    application = assemble(result)

    assert application.name == "svc"
    assert isinstance(application.modules, tuple)
    assert isinstance(application.modules[0].actions, tuple)
    assert application.typedefs == {"User": typedef}
    payload = application.to_dict()
    assert payload["modules"][0]["actions"][0]["route"] == {"method": "GET", "path": "/x"}
    assert "route_composed" not in payload["modules"][0]["actions"][0]
