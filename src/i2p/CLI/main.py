"""
Command Line Interface for I2P.
"""
import json
import logging
import sys

import click
import yaml

from ..config import load_settings
from ..CONVERTERS.to_systemd import SystemdConverter
from ..EXTRACTORS.errors import is_not_found
from ..MANAGERS.formation_manager import FormationManager
from ..PARSERS.procfile_parser import marshal_procfile
from ..MODELS.procfile import ExecCommand, ExtendedProcess, ExtendedProcfile
from ..REGISTRY.image_reference import ImageReference
from ..RUNTIME.context import Context
from ..RUNTIME.runtime_client import DockerRuntimeClient


@click.group()
@click.option('--env-file', default=None, help='Load settings from this .env file')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, env_file, verbose):
    """
    I2P - Image to Procfile.

    Finds the process types a container image declares.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj['settings'] = load_settings(env_file)


@cli.command()
@click.argument('image')
@click.option('--format', '-o', 'fmt', type=click.Choice(['yaml', 'json', 'procfile', 'systemd']),
              default='yaml', help='Output format')
@click.option('--out', default='systemd', help='Output directory for systemd units')
@click.option('--extractor', '-e', 'extractors', multiple=True,
              help='Extractor to try, in order (file, cmd). Repeatable.')
@click.option('--timeout', type=float, default=None, help='Give up after this many seconds')
@click.pass_context
def extract(ctx, image, fmt, out, extractors, timeout):
    """Print the Formation declared by IMAGE."""
    settings = ctx.obj['settings']
    try:
        ref = ImageReference.parse(image)
        client = DockerRuntimeClient.from_settings(settings)
        manager = FormationManager(client, extractor_names=list(extractors) or settings.extractors)
        run_ctx = Context.background().with_timeout(
            timeout if timeout is not None else settings.extract_timeout
        )
        formation = manager.extract(run_ctx, ref, output=sys.stderr)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2 if is_not_found(e) else 1)

    if fmt == 'systemd':
        converter = SystemdConverter(formation, ref, app=ref.repository.rsplit('/', 1)[-1])
        click.echo(f"Systemd service files generated in {converter.convert(out)}")
    elif fmt == 'json':
        click.echo(json.dumps({name: p.model_dump() for name, p in formation.items()}, indent=2))
    elif fmt == 'procfile':
        procfile = ExtendedProcfile(processes={
            name: ExtendedProcess(command=ExecCommand(argv=p.command)) for name, p in formation.items()
        })
        click.echo(marshal_procfile(procfile).decode('utf-8'), nl=False)
    else:
        data = {name: p.model_dump() for name, p in formation.items()}
        click.echo(yaml.safe_dump(data, default_flow_style=False), nl=False)


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
