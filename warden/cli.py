"""CLI entry point for Warden."""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from warden_core.acl import AccessControlList
from warden_core.acl.registry import HierarchyRegistry
from warden_core.config import WardenConfig, load_config
from warden_core.config.loader import DEFAULT_CONFIG_TEMPLATE
from warden_core.errors import PolicyError
from warden_core.log import configure_logging
from warden_core.policy import load_policy, read_policy
from warden_core.policy.loader import EXAMPLE_POLICY_TEMPLATE

app = typer.Typer(
    name="warden",
    help="Hierarchical role/resource access control: check and inspect policies.",
)

config_app = typer.Typer(help="Manage Warden configuration.")
app.add_typer(config_app, name="config")

policy_app = typer.Typer(help="Create and validate policy files.")
app.add_typer(policy_app, name="policy")

# Global state
_config: WardenConfig | None = None

# Placeholder for "any role" / "any resource" on the command line
WILDCARD_ARG = "-"

PolicyOption = Annotated[
    str | None,
    typer.Option("--policy", "-p", help="Policy file (default: policy.path from config)"),
]


def _get_config() -> WardenConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to warden.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)
    configure_logging(_config)


def _resolve_policy_path(policy: str | None) -> Path:
    path = policy or _get_config().policy.path
    if not path:
        rprint("[red]Error:[/red] no policy file given (use --policy or set policy.path)")
        raise typer.Exit(2)
    return Path(path)


def _load_acl(policy: str | None) -> AccessControlList:
    path = _resolve_policy_path(policy)
    try:
        return load_policy(path)
    except PolicyError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)


def _wildcard(value: str) -> str | None:
    return None if value == WILDCARD_ARG else value


def _display(value: str | None) -> str:
    return value if value is not None else _get_config().cli.show_wildcards_as


def _hierarchy_tree(title: str, registry: HierarchyRegistry) -> Tree:
    """Render a registry forest from each node's parent link.

    Nodes whose parent id is no longer registered are listed as roots.
    """
    nodes = registry.nodes
    tree = Tree(f"[bold]{title}[/bold] ({len(nodes)})")

    by_parent: dict[str | None, list[str]] = defaultdict(list)
    for node_id, node in nodes.items():
        parent_id = node.parent_id if node.parent_id in nodes else None
        by_parent[parent_id].append(node_id)

    def add_children(branch: Tree, node_id: str) -> None:
        for child_id in by_parent.get(node_id, []):
            add_children(branch.add(f"[cyan]{child_id}[/cyan]"), child_id)

    for node_id in by_parent.get(None, []):
        label = f"[cyan]{node_id}[/cyan]"
        dangling = nodes[node_id].parent_id
        if dangling is not None:
            label += f" [dim](parent {dangling} removed)[/dim]"
        add_children(tree.add(label), node_id)
    return tree


# ---------------------------------------------------------------------------
# Decisions
# ---------------------------------------------------------------------------


@app.command()
def check(
    role: Annotated[str, typer.Argument(help=f"Role id, or '{WILDCARD_ARG}' for none")],
    resource: Annotated[str, typer.Argument(help=f"Resource id, or '{WILDCARD_ARG}' for none")],
    privileges: Annotated[
        list[str] | None, typer.Argument(help="Privileges (all must be allowed)")
    ] = None,
    policy: PolicyOption = None,
    ci: Annotated[bool, typer.Option("--ci", help="Plain output")] = False,
) -> None:
    """Decide whether ROLE may exercise PRIVILEGES on RESOURCE.

    Exits 0 when allowed and 1 when denied.
    """
    acl = _load_acl(policy)
    privs = tuple(privileges or ())
    allowed = acl.is_allowed(_wildcard(role), _wildcard(resource), *privs)

    verdict = "ALLOWED" if allowed else "DENIED"
    if ci:
        typer.echo(verdict)
    else:
        color = "green" if allowed else "red"
        wanted = ", ".join(privs) if privs else "all privileges"
        rprint(
            f"[{color}]{verdict}[/{color}] role={_display(_wildcard(role))} "
            f"resource={_display(_wildcard(resource))} privileges={wanted}"
        )
    if not allowed:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------


@app.command()
def inspect(policy: PolicyOption = None) -> None:
    """Show the role and resource hierarchies of a policy."""
    acl = _load_acl(policy)
    rprint(_hierarchy_tree("Roles", acl.roles))
    rprint(_hierarchy_tree("Resources", acl.resources))


@app.command()
def rules(policy: PolicyOption = None) -> None:
    """List rules in evaluation order (first match wins)."""
    acl = _load_acl(policy)
    if not acl.rules:
        rprint("[yellow]No rules defined; everything is denied.[/yellow]")
        return

    table = Table(title=f"Rules ({len(acl.rules)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", justify="center")
    table.add_column("Role", style="cyan")
    table.add_column("Resource", style="magenta")
    table.add_column("Privilege")
    for i, rule in enumerate(acl.rules, start=1):
        kind = "[green]allow[/green]" if rule.type.value == "allow" else "[red]deny[/red]"
        table.add_row(
            str(i),
            kind,
            _display(rule.role_id),
            _display(rule.resource_id),
            _display(None if rule.all_privileges else rule.privilege),
        )
    rprint(table)


# ---------------------------------------------------------------------------
# Policy files
# ---------------------------------------------------------------------------


@policy_app.command("init")
def policy_init(
    path: Annotated[str, typer.Argument(help="Where to write the example")] = "policy.yaml",
    force: bool = typer.Option(False, "--force", help="Overwrite existing file"),
) -> None:
    """Write an example policy file."""
    target = Path(path)
    if target.exists() and not force:
        rprint(f"[yellow]{target} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(EXAMPLE_POLICY_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


@policy_app.command("validate")
def policy_validate(policy: PolicyOption = None) -> None:
    """Check that a policy file parses and validates."""
    path = _resolve_policy_path(policy)
    try:
        document = read_policy(path)
    except PolicyError as e:
        rprint(f"[red]Invalid:[/red] {e}")
        raise typer.Exit(2)
    rprint(
        f"[green]Valid[/green] {path}: {len(document.roles)} roles, "
        f"{len(document.resources)} resources, {len(document.rules)} rule entries"
    )


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default warden.yaml in current directory."""
    target = Path("warden.yaml")
    if target.exists() and not force:
        rprint("[yellow]warden.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
