"""CLI for the ``upsicron`` command."""

from pathlib import Path
from typing import Optional

import typer

from .config import ShellConfig


app = typer.Typer(
    help="Run the UpsicronOS text shell in the terminal",
    add_completion=False,
)


def build_config(
    state_file: Optional[Path] = None,
    seed: Optional[Path] = None,
    rate: float = 60.0,
    boot_ticks: int = 20,
    margin: int = 2,
    fresh: bool = False,
) -> ShellConfig:
    config = ShellConfig(
        update_rate=rate,
        boot_countdown=boot_ticks,
        margin=margin,
        seed_file=seed,
        fresh=fresh,
    )
    if state_file is not None:
        config.state_file = state_file
    return config


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    state_file: Optional[Path] = typer.Option(None, "--state-file", "-s", help="JSON file the session is saved to"),
    seed: Optional[Path] = typer.Option(None, "--seed", help="JSON seed tree for the virtual file system"),
    rate: float = typer.Option(60.0, "--rate", "-r", min=1.0, help="Ticks per second"),
    boot_ticks: int = typer.Option(20, "--boot-ticks", min=0, help="Boot screen length in ticks (0 skips it)"),
    margin: int = typer.Option(2, "--margin", min=0, help="Lines reserved below the text buffer"),
    fresh: bool = typer.Option(False, "--fresh", help="Ignore the saved session"),
    no_persist: bool = typer.Option(False, "--no-persist", help="Keep the session in memory only"),
):
    """
    Start the UpsicronOS shell.

    Examples:
        # Start with the saved session
        upsicron

        # Start from scratch with a custom file tree
        upsicron --fresh --seed my-files.json

        # Slower tick rate, no persistence
        upsicron --rate 20 --no-persist
    """
    from .shell.session import MemoryStore
    from .textual_host.app import UpsicronApp

    config = build_config(state_file, seed, rate, boot_ticks, margin, fresh)
    store = MemoryStore() if no_persist else None
    UpsicronApp(shell_config=config, store=store).run()


if __name__ == "__main__":
    app()
