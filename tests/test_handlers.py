from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from dialog_core.handlers import HandlerRegistry, parse_handler_reference


class Account:
    calls = []

    @staticmethod
    def logout(context):
        Account.calls.append(("logout", context))

    @staticmethod
    def _reset(context):
        Account.calls.append(("reset", context))

    label = "no callable"


def test_register_and_invoke():
    registry = HandlerRegistry()
    received = []
    registry.register("App.Settings.about", received.append)

    assert registry.invoke("App.Settings.about", "ctx") is True
    assert received == ["ctx"]


def test_decorator_registration():
    registry = HandlerRegistry()

    @registry.handler("App.Settings.help")
    def on_help(context):
        context.append("help")

    events = []
    registry.invoke("App.Settings.help", events)
    assert events == ["help"]
    assert "App.Settings.help" in registry


def test_register_type_resolves_public_and_private_members():
    Account.calls.clear()
    registry = HandlerRegistry()
    registry.register_type("App.Account", Account)

    assert registry.invoke("App.Account.logout", 1) is True
    assert registry.invoke("App.Account._reset", 2) is True
    assert Account.calls == [("logout", 1), ("reset", 2)]


def test_missing_type_or_member_is_noop():
    registry = HandlerRegistry()
    registry.register_type("App.Account", Account)

    assert registry.invoke("App.Unknown.logout", None) is False
    assert registry.invoke("App.Account.missing", None) is False
    assert registry.invoke("App.Account.label", None) is False
    assert registry.invoke("nodot", None) is False


def test_parse_reference_without_dot_is_ignored():
    assert parse_handler_reference("logout", HandlerRegistry()) is None


def test_reference_resolved_at_invocation_time():
    registry = HandlerRegistry()
    tap = parse_handler_reference("App.Late.handler", registry, context="data")

    assert tap.type_name == "App.Late"
    assert tap.member == "handler"
    assert tap() is False

    received = []
    registry.register("App.Late.handler", received.append)
    assert tap() is True
    assert received == ["data"]


def test_unbound_reference_is_noop():
    tap = parse_handler_reference("App.X.y", None)
    assert tap() is False


def test_registries_compare_by_content():
    assert HandlerRegistry() == HandlerRegistry()

    a = HandlerRegistry()
    a.register("A.b", print)
    assert a != HandlerRegistry()
