#!/usr/bin/env python3
"""
Command-line client for the task API.

Each mutating command prints its alert and then the reloaded task list.
Error alerts go to stderr and make the command exit with status 1.
"""
import json
import sys
from typing import Any

import click

from tasklist.client import ClientError, TaskClient
from tasklist.config import get_settings
from tasklist.view import FILTERS, TaskListView


def make_client(url: str) -> TaskClient:
    """Create the API client for the given tasks URL."""
    return TaskClient(base_url=url)


def format_json(data: Any) -> str:
    """Format data as JSON."""
    return json.dumps(data, indent=2, default=str)


def echo_alerts(view: TaskListView) -> None:
    for alert in view.alerts:
        click.echo(alert.message, err=alert.level == "error")


def echo_list(view: TaskListView) -> None:
    for line in view.render():
        click.echo(line)


def finish(view: TaskListView) -> None:
    """Print alerts and the current list, exiting 1 on errors."""
    failed = view.has_errors()
    echo_alerts(view)
    if view.tasks or not failed:
        echo_list(view)
    if failed:
        sys.exit(1)


@click.group()
@click.option('--url', envvar='TASKLIST_API_URL', default=None,
              help='Tasks endpoint URL (default: http://localhost:8000/api/tasks)')
@click.pass_context
def cli(ctx, url):
    """Manage tasks from the command line."""
    ctx.ensure_object(dict)
    client = make_client(url or get_settings().api_url)
    ctx.call_on_close(client.close)
    ctx.obj['view'] = TaskListView(client)


@cli.command(name='list')
@click.option('--filter', 'task_filter', type=click.Choice(list(FILTERS)), default='all',
              help='Which tasks to show (default: all)')
@click.option('--search', 'search', default=None, help='Only titles containing this text')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
@click.pass_context
def list_tasks(ctx, task_filter, search, output_format):
    """List tasks."""
    view = ctx.obj['view']
    view.search = search
    view.set_filter(task_filter)
    if output_format == 'json' and not view.has_errors():
        click.echo(format_json([task.model_dump(by_alias=True, mode='json') for task in view.tasks]))
        return
    finish(view)


@cli.command()
@click.argument('task_id', type=int)
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
@click.pass_context
def show(ctx, task_id, output_format):
    """Show one task."""
    client = ctx.obj['view'].client
    try:
        task = client.get_task(task_id)
    except ClientError as e:
        click.echo(f"Error {e}", err=True)
        sys.exit(1)

    if output_format == 'json':
        click.echo(format_json(task.model_dump(by_alias=True, mode='json')))
    else:
        click.echo(f"Task #{task.id}: {task.title}")
        click.echo(f"  Completed: {'yes' if task.completed else 'no'}")
        click.echo(f"  Created: {task.created_at.isoformat()}")
        click.echo(f"  Updated: {task.updated_at.isoformat()}")


@cli.command()
@click.argument('title')
@click.pass_context
def add(ctx, title):
    """Add a task."""
    view = ctx.obj['view']
    view.add_task(title)
    finish(view)


def _set_completed(view: TaskListView, task_id: int, completed: bool) -> None:
    if view.toggle_task(task_id, completed):
        view.show_alert(f"Task {task_id} marked {'completed' if completed else 'active'}", "success")
    finish(view)


@cli.command()
@click.argument('task_id', type=int)
@click.pass_context
def toggle(ctx, task_id):
    """Flip a task between active and completed."""
    view = ctx.obj['view']
    try:
        task = view.client.get_task(task_id)
    except ClientError as e:
        click.echo(f"Error {e}", err=True)
        sys.exit(1)
    _set_completed(view, task_id, not task.completed)


@cli.command()
@click.argument('task_id', type=int)
@click.pass_context
def complete(ctx, task_id):
    """Mark a task completed."""
    _set_completed(ctx.obj['view'], task_id, True)


@cli.command()
@click.argument('task_id', type=int)
@click.pass_context
def reopen(ctx, task_id):
    """Mark a task active again."""
    _set_completed(ctx.obj['view'], task_id, False)


@cli.command()
@click.argument('task_id', type=int)
@click.argument('title')
@click.pass_context
def edit(ctx, task_id, title):
    """Rename a task."""
    view = ctx.obj['view']
    if not view.edit_task(task_id, title) and not view.has_errors():
        click.echo("Edit cancelled")
        return
    finish(view)


@cli.command()
@click.argument('task_id', type=int)
@click.option('--yes', is_flag=True, help='Do not ask for confirmation')
@click.pass_context
def delete(ctx, task_id, yes):
    """Delete a task."""
    view = ctx.obj['view']
    confirmed = yes or click.confirm("Are you sure you want to delete this task?")
    if not confirmed:
        click.echo("Delete cancelled")
        return
    view.delete_task(task_id, confirmed)
    finish(view)


if __name__ == '__main__':
    cli()
