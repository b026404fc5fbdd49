"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil
import subprocess

import typer
from rich.console import Console
from rich.table import Table

from core.config import AppSettings, write_user_env_vars
from core.resources_catalog import missing_resource_files

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_java(settings: AppSettings) -> tuple[bool, str]:
    java = shutil.which(settings.java_executable)
    if java is None:
        return False, f"'{settings.java_executable}' not found in PATH"
    try:
        completed = subprocess.run(
            [java, "-version"],
            capture_output=True,
            text=True,
            timeout=30,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        return False, str(exc)
    # `java -version` escribe en stderr.
    first_line = (completed.stderr or completed.stdout).strip().splitlines()
    return completed.returncode == 0, first_line[0] if first_line else java


def _check_resources(settings: AppSettings) -> tuple[bool, str]:
    missing = missing_resource_files(settings)
    if not missing:
        return True, "All catalog files present"
    names = ", ".join(p.name for p in missing[:3])
    more = f" (+{len(missing) - 3} more)" if len(missing) > 3 else ""
    return False, f"Missing {len(missing)}: {names}{more}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="NLP4J-Decode Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_java, detail_java = _check_java(settings)
    table.add_row("Java", "OK" if ok_java else "FAIL", detail_java)
    table.add_row("Classpath", "OK", settings.engine_classpath)
    table.add_row("Main class", "OK", settings.engine_main_class)
    if settings.engine_timeout_seconds is None:
        table.add_row("Timeout", "OPTIONAL", "No timeout -> engine runs until it exits")
    else:
        table.add_row("Timeout", "OK", f"{settings.engine_timeout_seconds}s")

    ok_res, detail_res = _check_resources(settings)
    table.add_row("Lexica/models", "OK" if ok_res else "FAIL", detail_res)

    _console.print(table)

    if not ok_res:
        _console.print(
            f"\n[yellow]Note:[/yellow] Place the NLP4J lexica under {settings.lexica_dir} "
            f"and the models under {settings.models_dir}, or set NLP4J_DECODE_LEXICA_DIR/NLP4J_DECODE_MODELS_DIR."
        )


@app.command(name="setup-engine")
def setup_engine() -> None:
    """Interactive engine setup (stores config in the user config .env)."""

    settings = AppSettings()

    java = typer.prompt("Java executable", default=settings.java_executable, show_default=True).strip()
    classpath = typer.prompt("NLP4J classpath", default=settings.engine_classpath, show_default=True).strip()
    lexica_dir = typer.prompt("Lexica directory", default=str(settings.lexica_dir), show_default=True).strip()
    models_dir = typer.prompt("Models directory", default=str(settings.models_dir), show_default=True).strip()

    if not java or not classpath:
        raise typer.BadParameter("java executable and classpath are required")

    env_path = write_user_env_vars(
        {
            "NLP4J_DECODE_JAVA_EXECUTABLE": java,
            "NLP4J_DECODE_ENGINE_CLASSPATH": classpath,
            "NLP4J_DECODE_LEXICA_DIR": lexica_dir or None,
            "NLP4J_DECODE_MODELS_DIR": models_dir or None,
        }
    )

    _console.print(f"[green]Saved engine config to:[/green] {env_path}")
