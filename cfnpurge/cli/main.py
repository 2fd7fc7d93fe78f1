"""Main CLI entrypoint for cfnpurge."""

import json
import sys
from typing import Any, Dict

import click

from .. import __version__
from ..cleanup import CascadeCoordinator
from ..config import configure_logging, load_settings
from ..errors import CascadePurgeError, RemoteError
from ..events import EventTypes, emit_event, read_events
from ..ids import new_run_id
from ..session import build_services
from ..state import create_run_dir, get_run_dir, list_runs


@click.group()
@click.option('--profile', help='(optional) which aws profile to use')
@click.option('--region', help='(optional) which aws region to use')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--json', 'output_json', is_flag=True, help='Output machine-readable JSON')
@click.version_option(__version__, prog_name='cfnpurge')
@click.pass_context
def main(ctx, profile, region, verbose, output_json):
    """cfnpurge - helper commands for deleting AWS stacks completely."""
    ctx.ensure_object(dict)
    configure_logging(verbose)
    try:
        ctx.obj['settings'] = load_settings(profile=profile, region=region)
    except ValueError as e:
        raise click.ClickException(str(e))
    ctx.obj['json'] = output_json


def _json_output(data: Dict[str, Any]) -> None:
    """Output data as JSON."""
    click.echo(json.dumps(data, indent=None))


def _human_output(message: str) -> None:
    """Output human-readable message."""
    if not click.get_current_context().obj.get('json', False):
        click.echo(message)


@main.group()
def cfn():
    """Commands for CloudFormation operation."""


@cfn.command('purge-stack')
@click.option('--stack-name', required=True, help='Name or id of the stack to delete')
@click.option('--yes', is_flag=True, help='Skip confirmation prompt')
@click.pass_context
def purge_stack(ctx, stack_name, yes):
    """
    Delete a stack completely, including the images in its ECR repositories.

    CloudFormation's DeleteStack cannot remove a stack that holds non-empty
    ECR repositories. This command empties them first. Required permissions:
    cloudformation:ListStackResources, cloudformation:DeleteStack,
    ecr:DescribeImages, ecr:BatchDeleteImage.
    """
    output_json = ctx.obj['json']
    settings = ctx.obj['settings']

    if not stack_name.strip():
        raise click.BadParameter('must not be empty', param_hint="'--stack-name'")

    if not yes:
        if not click.confirm(f"Delete stack {stack_name} and every image in its ECR repositories?"):
            _human_output("❌ Purge cancelled")
            return

    try:
        stacks, repositories = build_services(settings)
    except RemoteError as e:
        _fail(str(e), output_json, code=1)

    run_id = new_run_id()
    create_run_dir(run_id)

    def on_event(event_type: str, data: Dict[str, Any]) -> None:
        emit_event(run_id, event_type, data)
        if event_type == EventTypes.REPO_PURGED:
            _human_output(f"✅ all images in {data['repository']} successfully deleted")
        elif event_type == EventTypes.REPO_EMPTY:
            _human_output(f"✅ {data['repository']} has no images")

    coordinator = CascadeCoordinator(
        stacks,
        repositories,
        target_type=settings.target_type,
        event_callback=on_event,
    )

    _human_output(f"🗑️  Purging stack {stack_name} (run {run_id})...")
    try:
        result = coordinator.cascade_delete(stack_name)
    except CascadePurgeError as e:
        if output_json:
            _json_output({'run_id': run_id, 'status': 'failed', 'error': str(e), **e.result.to_dict()})
        else:
            for failure in e.failures:
                _human_output(f"❌ failed to delete images of {failure.repository}:")
                for f in failure.failures:
                    _human_output(f"   {f.identifier}: {f.code} {f.reason}".rstrip())
            _human_output(f"⚠️  Stack {stack_name} was NOT deleted. Manual intervention required.")
        sys.exit(1)
    except RemoteError as e:
        if output_json:
            _json_output({'run_id': run_id, 'status': 'aborted', 'error': str(e), 'remote_error': e.to_dict()})
        else:
            _human_output(f"❌ {e}")
            _human_output(f"⚠️  Stack {stack_name} was NOT deleted.")
        sys.exit(1)

    if output_json:
        _json_output({'run_id': run_id, 'status': 'success', **result.to_dict()})
    else:
        _human_output(f"✅ Stack {stack_name} deletion requested")


@cfn.command('runs')
@click.pass_context
def runs(ctx):
    """List recorded purge runs."""
    run_ids = list_runs()
    if ctx.obj['json']:
        _json_output({'runs': run_ids})
        return
    if not run_ids:
        click.echo("No purge runs recorded")
    for run_id in run_ids:
        click.echo(run_id)


@cfn.command('events')
@click.argument('run_id')
@click.pass_context
def events(ctx, run_id):
    """Show the event log of a purge run."""
    output_json = ctx.obj['json']
    try:
        run_dir = get_run_dir(run_id)
    except ValueError as e:
        _fail(str(e), output_json, code=2)
    if not run_dir.exists():
        _fail(f"Run {run_id} not found", output_json, code=2)

    for event in read_events(run_id):
        if output_json:
            _json_output(event)
        else:
            _print_event_human(event)


def _fail(message: str, output_json: bool, code: int = 1) -> None:
    if output_json:
        _json_output({'error': message})
    else:
        click.echo(f"❌ {message}")
    sys.exit(code)


def _print_event_human(event: Dict[str, Any]) -> None:
    """Print event in human-readable format."""
    event_type = event.get('type', 'UNKNOWN')
    ts = event.get('ts', '')
    time_str = ts[11:19] if len(ts) >= 19 else ts
    data = event.get('data', {})

    if event_type in (EventTypes.REPO_PURGED, EventTypes.REPO_EMPTY, EventTypes.STACK_DELETE_REQUESTED):
        color = 'green'
    elif event_type in (EventTypes.REPO_FAILED, EventTypes.PURGE_FAILED, EventTypes.PURGE_ABORTED):
        color = 'red'
    else:
        color = 'blue'

    click.echo(f"[{time_str}] {click.style(event_type, fg=color)}: {json.dumps(data)}")


if __name__ == '__main__':
    main()
