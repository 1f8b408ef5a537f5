"""Rich terminal output for resolved views and the route table."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from modules.access import RenderKind
from modules.routing import RouteTable

from .models import SiteView

console = Console()

RENDER_STYLES = {
    RenderKind.CONTENT: "green",
    RenderKind.LOADING: "yellow",
    RenderKind.BLOCKED: "red",
    RenderKind.MAINTENANCE: "magenta",
    RenderKind.REDIRECT: "cyan",
}


def format_flags(view: SiteView) -> str:
    """Comma-separated list of the chrome pieces that are shown.

    Example: "banner, header, language switch, footer"
    """
    shell = view.shell
    flags = [
        ("banner", shell.banner),
        ("header", shell.header),
        ("language switch", shell.language_switch),
        ("footer", shell.footer),
        ("toast host", shell.toast_host),
        ("bottom nav", shell.bottom_nav),
        ("safe-area spacer", shell.safe_area_spacer),
    ]
    shown = [name for name, on in flags if on]
    return ", ".join(shown) if shown else "none"


def build_view_panel(view: SiteView) -> Panel:
    """Summarize a view in a bordered panel."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    table.add_row("Path", view.canonical_path)
    table.add_row("Language", view.language.value)
    route = view.route or "-"
    if view.fallback:
        route += " (soft 404)"
    table.add_row("Route", route)
    table.add_row("Page", view.page or "-")
    if view.params:
        table.add_row("Params", ", ".join(f"{k}={v}" for k, v in view.params.items()))

    style = "red"
    if view.decision is not None:
        decision = view.decision
        style = RENDER_STYLES.get(decision.render, "white")
        table.add_row("Render", Text(decision.render.value, style=style))
        table.add_row("Blocked state", decision.blocked_state.value)
        if decision.gate:
            table.add_row("Gate", decision.gate)
        if decision.call_to_action:
            table.add_row("Call to action", decision.call_to_action)
        if decision.redirect_to:
            table.add_row("Redirect", decision.redirect_to)
        if decision.message:
            table.add_row("Message", decision.message)
    if view.error:
        table.add_row("Error", Text(view.error, style="red"))

    table.add_row("Shell", f"{view.shell.kind.value}: {format_flags(view)}")
    active = view.shell.active_item
    if active:
        table.add_row("Active nav", active)

    return Panel(table, title="Resolved view", border_style=style)


def print_view(view: SiteView) -> None:
    console.print(build_view_panel(view))


def print_routes(table: RouteTable) -> None:
    """Print the route table in match order."""
    out = Table(title="Routes (match order)")
    out.add_column("Name", style="cyan")
    out.add_column("Pattern")
    out.add_column("Tier")
    out.add_column("Page")
    out.add_column("Gates")
    out.add_column("Auth page")

    for descriptor in table.ordered:
        gates = ", ".join(r.kind.value for r in descriptor.requirements) or "-"
        out.add_row(
            descriptor.name,
            descriptor.pattern.template,
            descriptor.pattern.tier.name.lower(),
            descriptor.page,
            gates,
            "yes" if descriptor.auth_page else "",
        )
    console.print(out)
