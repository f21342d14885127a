"""kubedrift command line.

Exit codes for ``check``:
    0 -- every checked component matches its snapshot
    1 -- drift detected (report on stdout)
    2 -- an upstream default constructor failed
"""

from __future__ import annotations

import sys

import click

from kubedrift import __version__
from kubedrift.config import load_config
from kubedrift.errors import DriftError, KubeDriftError, UpstreamConstructionFailure
from kubedrift.guard import DriftGuard
from kubedrift.models.config import KubeDriftConfig
from kubedrift.models.report import DiffReport
from kubedrift.models.snapshot import Snapshot
from kubedrift.observability.logging import get_logger, setup_logging
from kubedrift.render import render, render_json_all, render_tree
from kubedrift.snapshots import SNAPSHOTS
from kubedrift.sources import current_defaults, get_source

EXIT_DRIFT = 1
EXIT_UPSTREAM_FAILURE = 2

_COMPONENT_NAMES = [str(k) for k in SNAPSHOTS]


def _render_json(snapshots: list[Snapshot], failures: dict[str, DriftError]) -> str:
    # check_all only raises DriftError after every component was checked, so
    # a component without a failure passed with an empty report.
    return render_json_all(
        (
            str(s.component),
            failures[str(s.component)].report if str(s.component) in failures else DiffReport(),
            s.policy,
            s.upstream_version,
        )
        for s in snapshots
    )


@click.group()
@click.version_option(__version__, prog_name="kubedrift")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Detect drift between vendored upstream defaults and reviewed snapshots."""
    config = load_config()
    setup_logging(config.log.level, config.log.format)
    ctx.obj = config


@cli.command("check")
@click.argument("components", nargs=-1, type=click.Choice(_COMPONENT_NAMES))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Report format (default: KUBEDRIFT_REPORT_FORMAT or text).",
)
@click.pass_obj
def check_cmd(config: KubeDriftConfig, components: tuple[str, ...], fmt: str | None) -> None:
    """Check COMPONENTS (default: all) against their committed snapshots."""
    log = get_logger("cli")
    fmt = fmt or config.report.format
    selected = list(components) or config.guard.components or _COMPONENT_NAMES
    snapshots: list[Snapshot] = [SNAPSHOTS[name] for name in selected]  # type: ignore[index]

    try:
        results = DriftGuard().check_all(snapshots)
    except DriftError as err:
        if fmt == "json":
            click.echo(_render_json(snapshots, {e.component: e for e in err.errors or [err]}))
        else:
            click.echo(err.render(config.report.max_value_width))
        sys.exit(EXIT_DRIFT)
    except UpstreamConstructionFailure as err:
        log.error("upstream_construction_failed", target=err.component, reason=err.reason)
        click.echo(str(err), err=True)
        sys.exit(EXIT_UPSTREAM_FAILURE)
    except KubeDriftError:
        raise
    except Exception as exc:
        # the guard lets upstream constructor errors through unwrapped
        log.error("upstream_construction_failed", error=str(exc), error_type=type(exc).__name__)
        click.echo(f"Upstream defaults could not be constructed: {type(exc).__name__}: {exc}", err=True)
        sys.exit(EXIT_UPSTREAM_FAILURE)

    if fmt == "json":
        click.echo(_render_json(snapshots, {}))
        return
    for name in results:
        click.echo(render(results[name], component=name))


@cli.command("show")
@click.argument("component", type=click.Choice(_COMPONENT_NAMES))
@click.option("--snapshot", "from_snapshot", is_flag=True, help="Show the committed snapshot instead.")
@click.pass_obj
def show_cmd(config: KubeDriftConfig, component: str, from_snapshot: bool) -> None:
    """Print the current upstream defaults of COMPONENT as path = value lines."""
    tree = SNAPSHOTS[component].defaults if from_snapshot else current_defaults(component)  # type: ignore[index]
    click.echo(render_tree(tree, max_value_width=config.report.max_value_width))


@cli.command("list")
def list_cmd() -> None:
    """List guarded components with their snapshot version and digest."""
    for kind, snapshot in SNAPSHOTS.items():
        source = get_source(kind)
        click.echo(
            f"{kind}\t{snapshot.upstream_version}\t{snapshot.digest()[:12]}\t"
            f"{len(snapshot.policy)} annotations\t{source.description}"
        )
