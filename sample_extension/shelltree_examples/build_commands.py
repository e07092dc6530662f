"""Sample extension demonstrating shelltree command registration.

Adds a `build` command group:
- `build maps [--maps=1,2] [--tiles=x,y]` extracts map files
- `build vmaps [--extract-only|--assemble-only]` extracts and assembles vmaps
- `build mmaps [--threads=N]` generates movement maps

Enable it in config.toml:

    [shelltree]
    extension_paths = ["path/to/sample_extension"]
    extensions = ["shelltree_examples.build_commands"]

    [build]
    tools = "/opt/tools"
"""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING

from shelltree.models import CommandError
from shelltree.process import run_process

if TYPE_CHECKING:
    from shelltree.session import Session


def list_argument(prefix: str, args: list[str]) -> list[int]:
    """Collect the integers of every `prefix` argument, e.g. `--maps=1,2`."""
    values: list[int] = []
    for arg in args:
        if not arg.startswith(prefix):
            continue
        try:
            values.extend(int(v) for v in arg[len(prefix) :].split(",") if v)
        except ValueError as e:
            raise CommandError(f"Invalid value in {arg}") from e
    return values


def register(session: Session) -> None:
    """Register the `build` group."""
    tools = session.config.section("build").get_str("tools", ".")
    build = session.add_command("build", None, "Data-set build steps")

    async def run_maps(args: list[str]) -> None:
        command = shlex.quote(f"{tools}/map_extractor")
        maps = list_argument("--maps=", args)
        tiles = list_argument("--tiles=", args)
        if maps:
            command += f" --maps={','.join(map(str, maps))}"
        if tiles:
            command += f" --tiles={','.join(map(str, tiles))}"
        await run_process(command)

    async def run_vmaps(args: list[str]) -> None:
        if "--assemble-only" not in args:
            await run_process(shlex.quote(f"{tools}/vmap4_extractor"))
        if "--extract-only" not in args:
            await run_process(f"{shlex.quote(f'{tools}/vmap4_assembler')} Buildings vmaps")

    async def run_mmaps(args: list[str]) -> None:
        command = shlex.quote(f"{tools}/mmaps_generator")
        threads = list_argument("--threads=", args)
        if threads:
            command += f" --threads={threads[0]}"
        await run_process(command)

    build.add_command("maps", "--maps=map1,map2.. --tiles=x1,y1,..", "Extracts map files", run_maps)
    build.add_command("vmaps", "--extract-only|--assemble-only", "Extracts and assembles vmaps", run_vmaps)
    build.add_command("mmaps", "--threads=N", "Generates mmaps", run_mmaps)
