#!filepath: console_timer/cli.py
import subprocess
import time
from typing import List, Optional

import typer
from rich import print

from console_timer import __version__, init_logging
from console_timer.config import AppConfig
from console_timer.observability.instrumentation import Instrumentation

app = typer.Typer(help="console-timer: named wall-clock timers")


def _load(config: Optional[str]) -> AppConfig:
    cfg = AppConfig.load(path=config)
    init_logging(cfg.log)
    return cfg


@app.command()
def version():
    print(f"v{__version__}")


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def run(
    command: List[str] = typer.Argument(..., help="要计时的命令及参数"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="计时器名称，默认取命令名"),
    config: Optional[str] = typer.Option(None, "--config", help="YAML 配置文件"),
):
    """
    运行一个子进程并输出耗时，退出码与子进程一致

    子命令参数与 --name/--config 冲突时用 `--` 分隔：
        console-timer run -- mytool --name x
    """
    cfg = _load(config)
    label = name or command[0]
    inst = Instrumentation.from_config(cfg.timer)

    try:
        with inst.timer(label):
            proc = subprocess.run(command)
    except FileNotFoundError:
        print(f"[red]Command not found: {command[0]}[/red]")
        raise typer.Exit(code=127)

    raise typer.Exit(code=proc.returncode)


@app.command()
def demo(
    steps: int = typer.Option(3, min=1, help="中间读数次数"),
    interval: float = typer.Option(0.05, min=0.0, help="每步 sleep 秒数"),
    config: Optional[str] = typer.Option(None, "--config", help="YAML 配置文件"),
):
    """
    演示 start → sample(多次) → stop
    """
    cfg = _load(config)
    inst = Instrumentation.from_config(cfg.timer)

    with inst.timer("demo"):
        for i in range(1, steps + 1):
            time.sleep(interval)
            if i < steps:
                inst.sample("demo", message=f"step {i}/{steps}")

    if not inst.enabled:
        print(f"[yellow]demo finished: {steps} steps (timing disabled)[/yellow]")
        return

    total = inst.last["demo"]
    print(f"[green]demo finished: {steps} steps, {total:.2f}ms[/green]")


if __name__ == "__main__":
    app()

# python -m console_timer.cli demo --steps 3
