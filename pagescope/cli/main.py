"""
pagescope CLI - Build and try out page object selectors from the shell.
"""

import re
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from pagescope import __version__
from pagescope.core.errors import PageScopeError
from pagescope.core.options import FindOptions
from pagescope.core.selector import build_selector
from pagescope.core.tree import PageNode

console = Console()

_KEYED_SCOPE = re.compile(r"^(?P<key>[A-Za-z_][\w-]*)=(?P<scope>.*)$")


def build_chain(scopes, reset_at=()):
    """
    Build a page tree with one nested node per scope, root first.

    Each scope may be given as ``KEY=SELECTOR`` to name its node;
    unnamed nodes are called ``node1``, ``node2``, ... ``reset_at``
    holds the 1-based positions of nodes that reset inherited scope.

    Returns:
        The innermost node (the page root when ``scopes`` is empty)
    """
    current = PageNode()

    for index, raw in enumerate(scopes, start=1):
        match = _KEYED_SCOPE.match(raw)
        key, scope = (match.group("key"), match.group("scope")) if match else (f"node{index}", raw)
        current = current.attach(key, PageNode(scope=scope, reset_scope=index in reset_at))

    return current


def _filter_options(func):
    """Options shared by the commands that build a selector."""
    decorators = [
        click.option('-s', '--scope', 'scopes', multiple=True,
                     help='Node scope, root first; repeat for nesting. Use KEY=SELECTOR to name the node'),
        click.option('--reset-at', multiple=True, type=click.IntRange(min=1),
                     help='1-based position of a node that resets inherited scope'),
        click.option('--scope-override', default=None, help='Explicit scope appended to the chain'),
        click.option('--reset-scope', is_flag=True, help='Ignore the node chain and use --scope-override only'),
        click.option('--contains', default=None, help='Filter by text using :contains()'),
        click.option('--at', type=click.IntRange(min=0), default=None, help='Filter by 0-based index using :eq()'),
        click.option('--last', is_flag=True, help='Filter by using :last'),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="pagescope")
def cli():
    """🔎 pagescope - Scoped element lookup for page object tests."""
    pass


@cli.command()
@click.argument('target')
@_filter_options
def selector(target, scopes, reset_at, scope_override, reset_scope, contains, at, last):
    """
    Print the selector built for TARGET under a chain of scopes.

    \b
    Examples:

        pagescope selector .button -s section=.section

        pagescope selector li -s .todo-list --contains "Buy milk" --last
    """
    node = build_chain(scopes, set(reset_at))
    options = FindOptions(scope=scope_override, reset_scope=reset_scope, contains=contains, at=at, last=last)

    click.echo(build_selector(node, target, options))


@cli.command()
@click.argument('url')
@click.argument('target')
@_filter_options
@click.option('--multiple', is_flag=True, help='Allow the selector to match several elements')
@click.option('--container', default=None, help='Selector of the container to search within')
@click.option('--key', 'page_object_key', default=None, help='Name of the element in error messages')
@click.option('--visible', is_flag=True, help='Also require a displayed match')
@click.option('--headless/--headed', default=True, help='Run browser in headless mode')
def find(url, target, scopes, reset_at, scope_override, reset_scope, contains, at, last,
         multiple, container, page_object_key, visible, headless):
    """
    Open URL and resolve TARGET under a chain of scopes.

    \b
    Examples:

        pagescope find "https://demo.playwright.dev/todomvc/" .new-todo

        pagescope find "https://example.com" a -s body --contains "More" --visible
    """
    from pagescope.core.driver_factory import DriverConfig, driver_session
    from pagescope.layers.sense.element_finder import find_element_with_assert, find_visible_element_with_assert

    node = build_chain(scopes, set(reset_at))
    options = FindOptions(
        scope=scope_override,
        reset_scope=reset_scope,
        contains=contains,
        at=at,
        last=last,
        multiple=multiple,
        test_container=container,
        page_object_key=page_object_key,
    )
    resolved = build_selector(node, target, options)

    console.print(Panel.fit(
        f"[bold blue]🔎 pagescope[/bold blue]\n"
        f"[dim]{escape(url)}[/dim]",
        border_style="blue"
    ))
    console.print(f"\n[bold]Selector:[/bold] {escape(resolved)}\n")

    config = DriverConfig.from_env()
    config.headless = headless

    try:
        with driver_session(config, register_default=True) as driver:
            driver.get(url)
            lookup = find_visible_element_with_assert if visible else find_element_with_assert
            result = lookup(node, target, options)

            table = Table(show_header=True, header_style="bold cyan")
            table.add_column("#", style="dim", width=4)
            table.add_column("Tag", style="green")
            table.add_column("Text", style="yellow", max_width=50)
            table.add_column("Displayed", justify="center")

            for index, element in enumerate(result):
                text = (element.text or "").strip()
                table.add_row(
                    str(index),
                    element.tag_name,
                    escape(text[:50] + "..." if len(text) > 50 else text),
                    "[green]yes[/green]" if element.is_displayed() else "[red]no[/red]",
                )

            console.print(table)
            console.print(f"\n[bold green]✅ {len(result)} element(s) matched[/bold green]")
    except PageScopeError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        sys.exit(1)


@cli.command()
def doctor():
    """
    Check that runtime dependencies are installed.
    """
    console.print(Panel.fit(
        f"[bold cyan]🩺 pagescope Doctor[/bold cyan]\n"
        f"[dim]Dependency Check[/dim]",
        border_style="cyan"
    ))
    console.print()

    dependencies = [
        ("selenium", "Sense - WebDriver queries"),
        ("click", "CLI - Commands"),
        ("rich", "CLI - Output"),
    ]

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Package", style="blue")
    table.add_column("Role", style="dim")
    table.add_column("Status", justify="center")

    all_good = True

    for package, role in dependencies:
        try:
            __import__(package)
            status = "[green]✅ Installed[/green]"
        except ImportError:
            status = "[yellow]⚠️ Missing[/yellow]"
            all_good = False

        table.add_row(package, role, status)

    console.print(table)
    console.print()

    if all_good:
        console.print("[bold green]✅ All dependencies installed! pagescope is ready.[/bold green]")
    else:
        console.print("[yellow]⚠️ Some dependencies are missing.[/yellow]")
        console.print("[dim]Install with: pip install pagescope[/dim]")


@cli.command()
def version():
    """Show version information."""
    console.print(f"pagescope v{__version__}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
