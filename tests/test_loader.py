"""Tests for mockingbird.routing.loader: handler import and validation."""

import sys
from pathlib import Path

import pytest

from mockingbird.errors import ConfigurationError, InvalidHandlerError
from mockingbird.http.response import ResponseSink
from mockingbird.routing.loader import accepts_request_response, load
from mockingbird.routing.route import CandidateRoute, PathSegment


def _candidate(source: Path, method: str = "GET", *names: str) -> CandidateRoute:
    segments = tuple(
        PathSegment(name[1:-1], is_param=True) if name.startswith("{") else PathSegment(name)
        for name in names
    )
    return CandidateRoute(method=method, segments=segments, source=source)


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content)
    return path


class TestLoad:
    def test_handler_attribute(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "get.py", "def handler(request, response):\n    pass\n")
        unit = load(_candidate(source, "GET", "users"))
        assert unit.method == "GET"
        assert unit.path == "/users"
        assert unit.source == source
        assert unit.handler.__name__ == "handler"

    def test_method_named_fallback(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "post.py", "def post(request, response):\n    pass\n")
        unit = load(_candidate(source, "POST"))
        assert unit.handler.__name__ == "post"

    def test_handler_preferred_over_method_name(self, tmp_path: Path) -> None:
        source = _write(
            tmp_path,
            "get.py",
            "def handler(request, response):\n    pass\n\n"
            "def get(request, response):\n    pass\n",
        )
        assert load(_candidate(source)).handler.__name__ == "handler"

    def test_async_handler(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "get.py", "async def handler(request, response):\n    pass\n")
        assert load(_candidate(source)).handler.__name__ == "handler"

    def test_callable_object(self, tmp_path: Path) -> None:
        source = _write(
            tmp_path,
            "get.py",
            "class Echo:\n"
            "    def __call__(self, request, response):\n"
            "        pass\n\n"
            "handler = Echo()\n",
        )
        assert callable(load(_candidate(source)).handler)

    def test_empty_file_rejected(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "get.py", "")
        with pytest.raises(
            InvalidHandlerError,
            match='Handler file for route "GET /" must export a function',
        ):
            load(_candidate(source))

    def test_non_callable_rejected(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "get.py", "handler = 42\n")
        with pytest.raises(InvalidHandlerError, match="must export a function"):
            load(_candidate(source))

    def test_wrong_arity_rejected(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "get.py", "def handler(request):\n    pass\n")
        with pytest.raises(InvalidHandlerError, match=r"must accept \(request, response\)"):
            load(_candidate(source))

    def test_import_failure_names_route(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "get.py", "def handler(request, response)\n")
        with pytest.raises(InvalidHandlerError, match='route "GET /users" could not be loaded'):
            load(_candidate(source, "GET", "users"))

    def test_invalid_handler_is_configuration_error(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "get.py", "")
        with pytest.raises(ConfigurationError):
            load(_candidate(source))

    def test_empty_param_name_rejected(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "get.py", "def handler(request, response):\n    pass\n")
        with pytest.raises(ConfigurationError, match="empty path parameter"):
            load(_candidate(source, "GET", "users", "{}"))

    def test_repeated_param_name_rejected(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "get.py", "def handler(request, response):\n    pass\n")
        with pytest.raises(ConfigurationError, match="repeats path parameter 'id'"):
            load(_candidate(source, "GET", "{id}", "{id}"))

    def test_handler_package(self, tmp_path: Path) -> None:
        package = tmp_path / "post"
        package.mkdir()
        (package / "fixtures.py").write_text("ITEMS = [1, 2]\n")
        (package / "__init__.py").write_text(
            "from .fixtures import ITEMS\n\n"
            "def handler(request, response):\n"
            "    response.send(ITEMS)\n"
        )
        unit = load(_candidate(package, "POST"))
        assert unit.source == package

    def test_each_load_gets_fresh_module(self, tmp_path: Path) -> None:
        source = _write(
            tmp_path,
            "get.py",
            "calls = []\n\ndef handler(request, response):\n    calls.append(1)\n",
        )
        first = load(_candidate(source)).handler
        second = load(_candidate(source)).handler
        assert first.__globals__ is not second.__globals__

    def test_file_module_not_left_in_sys_modules(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "get.py", "def handler(request, response):\n    pass\n")
        before = set(sys.modules)
        unit = load(_candidate(source))
        assert unit.handler.__module__ not in sys.modules
        assert not [name for name in set(sys.modules) - before if name.startswith("_mockingbird_")]

    def test_package_relative_import_at_call_time(self, tmp_path: Path) -> None:
        package = tmp_path / "get"
        package.mkdir()
        (package / "fixtures.py").write_text("ITEMS = [1, 2]\n")
        (package / "__init__.py").write_text(
            "def handler(request, response):\n"
            "    from .fixtures import ITEMS\n"
            "    response.send(ITEMS)\n"
        )
        unit = load(_candidate(package))
        sink = ResponseSink()
        unit.handler(None, sink)
        assert sink.response.json() == [1, 2]


class TestAcceptsRequestResponse:
    def test_two_positional(self) -> None:
        assert accepts_request_response(lambda request, response: None)

    def test_varargs(self) -> None:
        assert accepts_request_response(lambda *args: None)

    def test_extra_defaulted_parameter(self) -> None:
        assert accepts_request_response(lambda request, response, extra=None: None)

    def test_too_few(self) -> None:
        assert not accepts_request_response(lambda request: None)

    def test_too_many_required(self) -> None:
        assert not accepts_request_response(lambda a, b, c: None)
