"""Main CLI entry point for relnote."""

import logging
import sys

import click

from .. import __version__
from ..config import get_config, create_sample_config
from ..github import GitHubClient
from .notes import notes
from .serve import serve


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--github-token', help='GitHub API token (can also be set per command)')
@click.option('--config-file', '-c', help='Path to JSON configuration file')
@click.version_option(version=__version__, prog_name="relnote")
@click.pass_context
def cli(ctx, debug, github_token, config_file):
    """relnote - release notes from merged GitHub pull requests."""

    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        base_config = get_config(config_file)
    except ValueError as e:
        raise click.UsageError(str(e))

    ctx.ensure_object(dict)
    ctx.obj['base_config'] = base_config
    ctx.obj['global_github_token'] = github_token
    ctx.obj['logger'] = logging.getLogger('relnote')


def create_client_for_repo(ctx, owner=None, repo=None, github_token=None, org=None):
    """Create a GitHub client for a repository with configuration precedence.

    Command line options win over the global option, which wins over the
    config file and environment.
    """
    base_config = ctx.obj['base_config']
    logger = ctx.obj['logger']

    config = base_config.model_copy(update={
        'github_token': github_token or ctx.obj['global_github_token'] or base_config.github_token,
        'owner': owner or base_config.owner,
        'repo': repo or base_config.repo,
        'org': org or base_config.org,
    })

    if not config.owner or not config.repo:
        click.echo("Error: Repository is required. Use --owner and --repo, RELNOTE_OWNER/RELNOTE_REPO, or config file", err=True)
        sys.exit(1)

    if not config.github_token:
        logger.warning("No GitHub token configured, using unauthenticated access")

    return GitHubClient(config, logger), config


@cli.command()
@click.option('--path', '-p', default='relnote.json', help='Path for the config file')
def init_config(path):
    """Create a sample configuration file."""
    try:
        create_sample_config(path)
    except OSError as e:
        click.echo(f"Error creating config file: {e}", err=True)
        sys.exit(1)
    click.echo(f"Sample configuration file created at: {path}")
    click.echo("Please edit the file and add your GitHub token and repository.")


@cli.command()
def version():
    """Show version information."""
    click.echo(f"relnote version {__version__}")


cli.add_command(notes)
cli.add_command(serve)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()
