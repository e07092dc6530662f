"""Tests for line execution, aliases and built-in commands."""

import sys
from unittest.mock import AsyncMock, Mock

import pytest
import yaml

from shelltree.aliases import AliasStore
from shelltree.builtin_commands import register_builtins
from shelltree.models import CommandConfigurationError, CommandError, ShellError
from shelltree.session import Session

from .testtools import FakePromptSession, output_lines


@pytest.mark.asyncio
async def test_print(session, output):
    await session.send_command('print hello "big world"')
    assert output_lines(output) == ["hello big world"]


@pytest.mark.asyncio
async def test_blank_line_is_noop(session, output):
    await session.send_command("   ")
    await session.send_command("")
    assert output.getvalue() == ""


@pytest.mark.asyncio
async def test_statement_isolation(session, output):
    await session.send_command("bad && print hi")
    assert output_lines(output) == ["No command bad", "hi"]


@pytest.mark.asyncio
async def test_handler_failure_is_isolated(session, output):
    session.add_command("boom", handler=AsyncMock(side_effect=RuntimeError("exploded")))
    await session.send_command("boom && print after")
    assert output_lines(output) == ["exploded", "after"]


@pytest.mark.asyncio
async def test_error_without_message(session, output):
    session.add_command("boom", handler=Mock(side_effect=KeyError()))
    await session.send_command("boom")
    assert output_lines(output) == ["KeyError"]


@pytest.mark.asyncio
async def test_stacktrace_when_enabled(session, output):
    session.print_stacktrace = True
    session.add_command("boom", handler=Mock(side_effect=RuntimeError("exploded")))
    await session.send_command("boom")
    text = output.getvalue()
    assert text.startswith("exploded\n")
    assert "Traceback (most recent call last)" in text
    assert "RuntimeError: exploded" in text


@pytest.mark.asyncio
async def test_statements_run_in_order(session):
    calls = []

    async def first(args):
        calls.append(("first", args))

    def second(args):
        calls.append(("second", args))

    session.add_command("first", handler=first)
    session.add_command("second", handler=second)
    await session.send_command("first a && second b c && first")
    assert calls == [("first", ["a"]), ("second", ["b", "c"]), ("first", [])]


@pytest.mark.asyncio
async def test_input_disabled_while_line_runs(session):
    states = []
    session.add_command("probe", handler=lambda args: states.append(session.terminal.enabled))
    session.terminal.set_enabled(True)
    await session.send_command("probe && probe")
    assert states == [False, False]
    assert session.terminal.enabled is True


@pytest.mark.asyncio
async def test_input_reenabled_after_failure(session):
    session.terminal.set_enabled(True)
    await session.send_command("nope")
    assert session.terminal.enabled is True


@pytest.mark.asyncio
async def test_duplicate_builtin_registration(session):
    with pytest.raises(CommandConfigurationError):
        register_builtins(session)


@pytest.mark.asyncio
async def test_alias_round_trip(session, output):
    move = Mock()
    session.add_command("move", handler=move)

    await session.send_command("command go move north")
    await session.send_command("go fast")
    await session.send_command("move north fast")

    assert move.call_count == 2
    assert move.call_args_list[0] == move.call_args_list[1]
    assert move.call_args_list[0].args == (["north", "fast"],)
    assert output_lines(output) == ["Created alias go"]


@pytest.mark.asyncio
async def test_alias_is_persisted(session, tmp_path):
    await session.define_alias("go", ["move", "north"])
    assert yaml.safe_load((tmp_path / "commands.yaml").read_text(encoding="utf-8")) == {"go": "move north"}


@pytest.mark.asyncio
async def test_alias_survives_restart(session, config, terminal, test_logger, tmp_path):
    await session.send_command("command go move north")

    restarted = Session(config, terminal=terminal, aliases=AliasStore(tmp_path / "commands.yaml", test_logger))
    register_builtins(restarted)
    move = Mock()
    restarted.add_command("move", handler=move)
    await restarted.load_aliases()

    await restarted.send_command("go fast")
    move.assert_called_once_with(["north", "fast"])


@pytest.mark.asyncio
async def test_alias_redefinition(session):
    move = Mock()
    session.add_command("move", handler=move)
    await session.send_command("command go move north")
    await session.send_command("command go move south")
    await session.send_command("go")
    move.assert_called_once_with(["south"])
    assert dict(session.aliases.items())["go"] == "move south"


@pytest.mark.asyncio
async def test_failed_alias_save_is_forgotten(session, output, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    alias_file = session.aliases.path
    session.aliases.path = blocker / "commands.yaml"
    await session.send_command("command bad print nope")
    assert "bad" not in session.root.children

    session.aliases.path = alias_file
    await session.send_command("command good print ok")
    assert yaml.safe_load(alias_file.read_text(encoding="utf-8")) == {"good": "print ok"}
    assert output_lines(output)[-1] == "Created alias good"


@pytest.mark.asyncio
async def test_alias_with_chained_statements(session, output):
    await session.send_command("command greet print hello && print world")
    assert dict(session.aliases.items())["greet"] == "print hello && print world"
    await session.send_command("greet && print done")
    assert output_lines(output) == ["Created alias greet", "hello", "world", "done"]


@pytest.mark.asyncio
async def test_alias_resolved_at_invocation(session, output):
    await session.send_command("command outer inner x")
    await session.send_command("outer")
    session.add_command("inner", handler=lambda args: session.terminal.info(f"inner {args}"))
    await session.send_command("outer y")
    assert output_lines(output) == ["Created alias outer", "No command inner", "inner ['x', 'y']"]


@pytest.mark.asyncio
async def test_alias_of_alias(session, output):
    await session.send_command("command a print from a")
    await session.send_command("command b a and b")
    await session.send_command("b")
    assert output_lines(output)[-1] == "from a and b"


@pytest.mark.asyncio
async def test_alias_keeps_input_disabled(session):
    states = []
    session.add_command("probe", handler=lambda args: states.append(session.terminal.enabled))
    await session.define_alias("twice", ["probe", "&&", "probe"])
    session.terminal.set_enabled(True)
    await session.send_command("twice && probe")
    assert states == [False, False, False]
    assert session.terminal.enabled is True


@pytest.mark.asyncio
async def test_alias_usage_errors(session, output):
    await session.send_command("command")
    await session.send_command("command command print x")
    assert output_lines(output) == [
        "Usage: command <alias> <command...>",
        "command can't be redefined",
    ]
    with pytest.raises(CommandError):
        await session.define_alias("", ["x"])


@pytest.mark.asyncio
async def test_help(session, output):
    session.add_command("build").add_command("maps", "dataset", "Extracts maps", Mock())
    await session.send_command("help")
    first = output_lines(output)
    await session.send_command("help")
    assert output_lines(output) == first + first
    assert first == [
        "print (messages) - Prints out messages to the screen",
        "command (alias command) - Creates a command alias",
        "help (command, [args]?) - Prints this help message",
        "exit - Leaves the interactive prompt",
        "build",
        "  maps (dataset) - Extracts maps",
    ]


@pytest.mark.asyncio
async def test_help_path(session, output):
    session.add_command("build").add_command("maps", "dataset", "Extracts maps", Mock())
    await session.send_command("help build")
    assert output_lines(output) == ["build", "  maps (dataset) - Extracts maps"]


@pytest.mark.asyncio
async def test_help_unknown_path_is_a_warning(session, output):
    await session.send_command("help nope && print still running")
    assert output_lines(output) == ["root has no child command nope", "still running"]


@pytest.mark.asyncio
async def test_help_lists_aliases(session, output):
    await session.define_alias("go", ["move", "north"])
    await session.send_command("help go")
    assert output_lines(output) == ["go - Alias for 'move north'"]


@pytest.mark.asyncio
async def test_exit_stops_terminal(session, output):
    prompt_session = FakePromptSession("exit", "print never")
    session.terminal.set_input_callback(session.send_command)
    session.terminal.set_enabled(True)
    await session.terminal.run(prompt_session)
    assert prompt_session.prompts == ["> "]
    assert output_lines(output) == []


@pytest.mark.asyncio
async def test_enter_loop(session, mocker):
    run = mocker.patch.object(session.terminal, "run", new=AsyncMock())
    await session.enter_loop()
    run.assert_awaited_once()
    assert session.terminal.enabled is True
    assert await session.terminal.submit("print via loop")


def _write_extension(tmp_path, body):
    ext_dir = tmp_path / "ext"
    ext_dir.mkdir(exist_ok=True)
    (ext_dir / "shelltree_test_ext.py").write_text(body, encoding="utf-8")
    return ext_dir


@pytest.fixture
def extension_config(config, tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "path", list(sys.path))
    monkeypatch.delitem(sys.modules, "shelltree_test_ext", raising=False)

    def _configure(body):
        ext_dir = _write_extension(tmp_path, body)
        config["shelltree"] = {"extensions": ["shelltree_test_ext"], "extension_paths": [str(ext_dir)]}
        return config

    yield _configure
    sys.modules.pop("shelltree_test_ext", None)


@pytest.mark.asyncio
async def test_load_extensions(extension_config, terminal, output):
    config = extension_config(
        "def register(session):\n"
        "    grp = session.add_command('grp')\n"
        "    grp.add_command('hello', None, None, lambda args: session.terminal.info('ext ' + ' '.join(args)))\n"
    )
    sess = Session(config, terminal=terminal)
    sess.load_extensions()
    await sess.send_command("grp hello there")
    assert output_lines(output) == ["ext there"]


@pytest.mark.asyncio
async def test_extension_without_register(extension_config, terminal):
    sess = Session(extension_config("VALUE = 1\n"), terminal=terminal)
    with pytest.raises(ShellError):
        sess.load_extensions()


@pytest.mark.asyncio
async def test_extension_with_duplicate_command(extension_config, terminal):
    sess = Session(extension_config("def register(session):\n    session.add_command('print')\n"), terminal=terminal)
    register_builtins(sess)
    with pytest.raises(ShellError):
        sess.load_extensions()


@pytest.mark.asyncio
async def test_missing_extension(config, terminal):
    config["shelltree"] = {"extensions": ["shelltree_no_such_module"], "extension_paths": []}
    with pytest.raises(ShellError):
        Session(config, terminal=terminal).load_extensions()


@pytest.mark.asyncio
async def test_load_aliases_rejects_reserved_name(session, tmp_path):
    (tmp_path / "commands.yaml").write_text(yaml.safe_dump({"go": "print go", "command": "print x"}), encoding="utf-8")
    with pytest.raises(ShellError):
        await session.load_aliases()
