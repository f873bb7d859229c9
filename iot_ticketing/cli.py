import asyncio
import logging
from typing import List, Optional

import typer
from typing_extensions import Annotated
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from iot_ticketing.client.ticket_desk import TicketDesk
from iot_ticketing.domains.enums import Priority, Role, TicketTab
from iot_ticketing.domains.errors import TicketingError
from iot_ticketing.domains.tickets import Ticket

# --- Basic Logging Configuration ---
logging.basicConfig(level=logging.WARNING, format="%(levelname)s:%(name)s:%(message)s")
# --- End Logging Configuration ---

app = typer.Typer()
console = Console()

ConfigOption = Annotated[
    Optional[str],
    typer.Option(help="Path to the configuration file. Uses in-memory demo data if omitted."),
]
RoleOption = Annotated[Role, typer.Option(help="Role to act as.")]


def open_desk(config: Optional[str], role: Role) -> TicketDesk:
    """Build the desk and log in, exiting cleanly on configuration errors."""
    try:
        if config:
            desk = TicketDesk(config_path=config)
        else:
            desk = TicketDesk(config={"seed_demo_data": True})
    except FileNotFoundError:
        console.print(f"[bold red]Error:[/bold red] Configuration file not found at '{config}'")
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[bold red]Error loading configuration:[/bold red] {e}")
        raise typer.Exit(code=1)
    desk.login(role)
    return desk


def run(action):
    """Run a desk operation and report workflow errors."""
    try:
        return action()
    except TicketingError as e:
        console.print(f"[bold red]{type(e).__name__}:[/bold red] {e}")
        raise typer.Exit(code=1)


def print_ticket(ticket: Ticket) -> None:
    teams = ", ".join(t.label for t in ticket.assigned_teams) or "-"
    lines = [
        f"[bold]{ticket.title}[/bold]",
        f"状态: {ticket.status.label}   优先级: {ticket.priority.label}   班组: {teams}",
        "",
        ticket.content,
    ]
    if ticket.preliminary_judgment:
        lines += ["", f"[cyan]初步判断:[/cyan] {ticket.preliminary_judgment}"]
    for d in ticket.diagnoses:
        lines.append(f"[green]{d.role.label}[/green] {d.timestamp:%m-%d %H:%M} {d.content}")
    if ticket.ai_analysis:
        lines += ["", "[magenta]处理意见:[/magenta]", ticket.ai_analysis]
    if ticket.resolution:
        lines += ["", f"[yellow]归档结果:[/yellow] {ticket.resolution}"]
    console.print(Panel("\n".join(lines), title=ticket.id))


@app.command()
def tickets(
    config: ConfigOption = None,
    role: RoleOption = Role.FRONT_SUPPORT,
    tab: Annotated[Optional[TicketTab], typer.Option(help="List tab.")] = None,
    search: Annotated[str, typer.Option(help="Filter by title, ID or content.")] = "",
    oldest_first: Annotated[bool, typer.Option(help="Sort oldest first.")] = False,
):
    """List tickets."""
    desk = open_desk(config, role)
    table = Table("ID", "标题", "状态", "优先级", "创建时间")
    for t in desk.tickets(tab, search, newest_first=not oldest_first):
        table.add_row(t.id, t.title, t.status.label, t.priority.label, f"{t.created_at:%Y-%m-%d %H:%M}")
    console.print(table)


@app.command()
def show(ticket_id: str, config: ConfigOption = None, role: RoleOption = Role.FRONT_SUPPORT):
    """Show one ticket."""
    desk = open_desk(config, role)
    print_ticket(run(lambda: desk.ticket(ticket_id)))


@app.command()
def actions(ticket_id: str, config: ConfigOption = None, role: RoleOption = Role.FRONT_SUPPORT):
    """List the actions the role may take on a ticket."""
    desk = open_desk(config, role)
    for action in run(lambda: desk.actions(ticket_id)):
        console.print(action.value)


@app.command()
def create(
    title: str,
    content: str,
    config: ConfigOption = None,
    role: RoleOption = Role.FRONT_SUPPORT,
    priority: Annotated[Priority, typer.Option(help="Ticket priority.")] = Priority.MEDIUM,
):
    """Open a new ticket."""
    desk = open_desk(config, role)
    ticket = run(lambda: desk.create_ticket(title, content, priority))
    console.print(f"[green]Created {ticket.id}[/green]")


@app.command()
def dispatch(
    ticket_id: str,
    judgment: Annotated[str, typer.Option(help="Preliminary judgment.")],
    team: Annotated[List[Role], typer.Option(help="Specialist team, repeatable.")],
    config: ConfigOption = None,
    role: RoleOption = Role.CRT,
):
    """Dispatch a pending ticket to specialist teams."""
    desk = open_desk(config, role)
    print_ticket(run(lambda: desk.dispatch(ticket_id, judgment, team)))


@app.command()
def reassign(
    ticket_id: str,
    team: Annotated[List[Role], typer.Option(help="Specialist team, repeatable.")],
    config: ConfigOption = None,
    role: RoleOption = Role.CRT,
):
    """Replace the teams assigned to a processing ticket."""
    desk = open_desk(config, role)
    print_ticket(run(lambda: desk.reassign_teams(ticket_id, team)))


@app.command()
def diagnose(ticket_id: str, text: str, config: ConfigOption = None, role: RoleOption = Role.CORE_NET):
    """Submit a diagnosis as a specialist team."""
    desk = open_desk(config, role)
    print_ticket(run(lambda: desk.submit_diagnosis(ticket_id, text)))


@app.command()
def analyze(
    ticket_id: str,
    config: ConfigOption = None,
    role: RoleOption = Role.CRT,
    regenerate: Annotated[bool, typer.Option(help="Replace an existing draft.")] = False,
):
    """Generate the analysis draft."""
    desk = open_desk(config, role)
    with console.status("[bold green]Generating analysis...", spinner="dots"):
        ticket = run(lambda: asyncio.run(desk.generate_analysis(ticket_id, regenerate)))
    print_ticket(ticket)


@app.command()
def draft(ticket_id: str, text: str, config: ConfigOption = None, role: RoleOption = Role.CRT):
    """Save an edited analysis draft."""
    desk = open_desk(config, role)
    print_ticket(run(lambda: desk.save_analysis_draft(ticket_id, text)))


@app.command()
def submit(ticket_id: str, config: ConfigOption = None, role: RoleOption = Role.CRT):
    """Forward the analysis to front support for archiving."""
    desk = open_desk(config, role)
    print_ticket(run(lambda: desk.submit_for_closure(ticket_id)))


@app.command()
def archive(ticket_id: str, note: str, config: ConfigOption = None, role: RoleOption = Role.FRONT_SUPPORT):
    """Archive a ticket with its final resolution."""
    desk = open_desk(config, role)
    print_ticket(run(lambda: desk.archive(ticket_id, note)))


@app.command("return-ticket")
def return_ticket(ticket_id: str, reason: str, config: ConfigOption = None, role: RoleOption = Role.FRONT_SUPPORT):
    """Return a ticket to processing."""
    desk = open_desk(config, role)
    print_ticket(run(lambda: desk.return_for_rework(ticket_id, reason)))


@app.command()
def notifications(
    config: ConfigOption = None,
    role: RoleOption = Role.CRT,
    mark_read: Annotated[bool, typer.Option(help="Mark all as read afterwards.")] = False,
):
    """List the role's notifications."""
    desk = open_desk(config, role)
    console.print(f"[bold]{role.label}[/bold]: {desk.unread_count()} unread")
    for n in desk.notifications():
        marker = " " if n.is_read else "[bold red]•[/bold red]"
        console.print(f"{marker} [{n.kind.value}] {n.ticket_title} ({n.ticket_id}): {n.message}")
    if mark_read:
        desk.mark_all_read()


@app.command()
def cases(config: ConfigOption = None, role: RoleOption = Role.CRT):
    """List the case library."""
    desk = open_desk(config, role)
    table = Table("ID", "标题", "解决方案")
    for c in desk.cases():
        table.add_row(c.id, c.title, c.resolution or "")
    console.print(table)


@app.command()
def stats(config: ConfigOption = None, role: RoleOption = Role.CRT):
    """Show dashboard statistics for the last 30 days."""
    desk = open_desk(config, role)
    report = desk.dashboard()
    s = report.stats
    console.print(
        f"今日新增 {s.today_count}   周期总数 {s.total_in_period}   "
        f"处理中 {s.processing_count}   已处理 {s.resolved_count}   解决率 {s.resolution_rate}%"
    )
    table = Table("状态", "数量")
    for status, count in report.status_breakdown.items():
        table.add_row(status.label, str(count))
    console.print(table)


if __name__ == "__main__":
    app()
