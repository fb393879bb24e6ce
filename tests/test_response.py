"""Tests for geode.gemini.response — status line and body accumulation."""

import pytest

from geode.gemini.response import Response
from geode.gemini.status import Status


class TestDefaults:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == Status.SUCCESS
        assert response.meta == "text/gemini"
        assert response.body == ""

    def test_header(self) -> None:
        assert Response().header == "20 text/gemini\r\n"
        assert Response(51, "-").header == "51 -\r\n"


class TestHeader:
    def test_set_header(self) -> None:
        response = Response()
        response.set_header(Status.INPUT, "Your name?")
        assert response.status == Status.INPUT
        assert response.meta == "Your name?"

    def test_plain_int_coerced(self) -> None:
        response = Response()
        response.status = 31
        assert response.status is Status.REDIRECT_PERMANENT

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(ValueError):
            Response(99)
        with pytest.raises(ValueError):
            Response().set_header(25, "nope")


class TestBody:
    def test_write_appends(self) -> None:
        response = Response()
        response.write("# Title\n")
        response.write("")
        response.write("Text\n")
        assert response.body == "# Title\nText\n"
        assert response.text == response.body

    def test_set_body_replaces(self) -> None:
        response = Response(body="old")
        response.set_body("new")
        assert response.body == "new"

    def test_body_bytes_utf8(self) -> None:
        assert Response(body="héllo").body_bytes == "héllo".encode()

    def test_repeated_reads_stable(self) -> None:
        response = Response()
        response.write("a")
        response.write("b")
        assert response.body == "ab"
        response.write("c")
        assert response.body == "abc"


class TestFactories:
    def test_input(self) -> None:
        assert Response.input("Query?").header == "10 Query?\r\n"
        assert Response.input("Password", sensitive=True).status == Status.SENSITIVE_INPUT

    def test_redirect(self) -> None:
        assert Response.redirect("/new").header == "30 /new\r\n"
        assert Response.redirect("/new", permanent=True).status == Status.REDIRECT_PERMANENT

    def test_failure(self) -> None:
        response = Response.failure(Status.SLOW_DOWN, "30")
        assert response.header == "44 30\r\n"
        assert response.body == ""


class TestEquality:
    def test_equal(self) -> None:
        assert Response(20, "text/gemini", "x") == Response(body="x")
        assert Response(51, "-") != Response()

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(Response())
