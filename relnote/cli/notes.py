"""Notes command implementation."""

import json
import sys

import click

from ..errors import ReleaseNoteError
from ..releasenote import (
    Filters,
    LabelSelector,
    MilestoneSelector,
    fetch_org_members,
    generate,
    milestone_title_for_release,
    parse_login_list,
    ignore_labels_filter,
    special_thanks_filter,
)


def selection_options(f):
    """Options shared by commands that generate a report."""
    options = [
        click.option('--release', '-r', required=True, help='Release number, e.g. 1.7 for milestone "1.7 Release"'),
        click.option('--owner', help='GitHub repository owner'),
        click.option('--repo', help='GitHub repository name'),
        click.option('--github-token', help='GitHub API token (overrides global setting)'),
        click.option('--by-label', is_flag=True, help='Treat --release as a label name instead of a milestone'),
        click.option('--milestone-suffix', help='Suffix appended to the release to form the milestone title'),
        click.option('--thanks', is_flag=True, help='Include special thanks notes. Organization members are excluded'),
        click.option('--org', help='Organization whose members get no thanks note (defaults to the owner)'),
        click.option('--urwelcome', '--exclude', 'urwelcome', default='',
                     help='Users to exclude from thank you notes, format: user1,user2'),
        click.option('--verymuch', '--force-include', 'verymuch', default='',
                     help='Users to thank even if they are org members, format: user1,user2'),
        click.option('--ignore-label', multiple=True, help='Leave out PRs with this label (repeatable)'),
        click.option('--workers', type=int, help='Number of concurrent lookups'),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def build_report(ctx, release, owner, repo, github_token, by_label, milestone_suffix,
                 thanks, org, urwelcome, verymuch, ignore_label, workers):
    """Generate the report for the selected release, exiting on failure."""

    # Import here to avoid circular dependency
    from .main import create_client_for_repo

    client, config = create_client_for_repo(ctx, owner, repo, github_token, org)
    logger = ctx.obj['logger']

    if by_label:
        selector = LabelSelector(release)
    else:
        suffix = config.milestone_suffix if milestone_suffix is None else milestone_suffix
        selector = MilestoneSelector(milestone_title_for_release(release, suffix))

    logger.info(f"Generating notes for {config.owner}/{config.repo}, release: {release}")

    try:
        special_thanks = None
        if thanks:
            members = fetch_org_members(client, config.members_org, logger)
            special_thanks = special_thanks_filter(
                members, parse_login_list(urwelcome), parse_login_list(verymuch)
            )

        ignore = None
        if ignore_label:
            ignore = ignore_labels_filter(ignore_label)

        return generate(
            client,
            selector,
            Filters(ignore=ignore, special_thanks=special_thanks),
            version=release,
            workers=workers or config.workers,
            logger=logger,
        )
    except ReleaseNoteError as e:
        logger.debug("Generation failed", exc_info=True)
        click.echo(f"Error generating release notes: {e}", err=True)
        sys.exit(1)


@click.command()
@selection_options
@click.option('--format', 'output_format', type=click.Choice(['markdown', 'json']), default='markdown',
              help='Output format')
@click.option('--output', '-o', help='Write notes to file instead of stdout')
@click.pass_context
def notes(ctx, output_format, output, **selection):
    """Generate release notes for a milestone."""

    report = build_report(ctx, **selection)

    if output_format == 'json':
        text = json.dumps(report.to_dict(), indent=2) + '\n'
    else:
        text = report.to_markdown()

    if not report.sections:
        click.echo("No release notes generated (no merged pull requests found or all excluded)", err=True)

    if output:
        try:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(text)
        except OSError as e:
            click.echo(f"Error writing to file {output}: {e}", err=True)
            sys.exit(1)
        click.echo(f"Release notes saved to: {output}")
    else:
        click.echo(text, nl=False)
