"""
Tag creation command for monotag.

Every option can also come from a GitHub Actions input (``INPUT_*``
environment variables) or from the ``tagging`` section of a config file.
Precedence: command line, then action inputs, then config file.
"""

import json
import logging
import sys
from typing import Optional

import click
from click.core import ParameterSource

from ..config import configure_logging, load_config
from ..discovery import find_project_files
from ..domain.operation import RunResult
from ..exit_codes import CommandError, get_exit_code_for_exception
from ..render import render_run_result
from ..services.global_tags import GlobalTagStrategy
from ..services.tagging_service import TaggingOptions, TaggingService
from ..summary import (
    format_failure_summary,
    format_job_summary,
    step_outputs,
    write_job_summary,
    write_step_outputs,
)

logger = logging.getLogger(__name__)

# Options that override the config file's ``tagging`` section
TAGGING_PARAMS = (
    'repository_path',
    'projects',
    'tag_prefix',
    'create_global_tags',
    'global_tag_strategy',
    'tag_message_template',
    'dry_run',
    'fail_on_existing',
    'include_test_projects',
    'include_non_packable',
    'only_changed',
    'sign_tags',
)


def _resolve_tagging_settings(ctx: click.Context, config: dict, params: dict) -> dict:
    """Overlay explicitly given options (command line or env) on the config section."""
    settings = dict(config.get('tagging', {}))
    for name in TAGGING_PARAMS:
        source = ctx.get_parameter_source(name)
        if source is not None and source is not ParameterSource.DEFAULT:
            settings[name] = params[name]
    return settings


@click.command('create')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), envvar='MONOTAG_CONFIG',
              help='Config file to load instead of .monotag.* discovery')
@click.option('--repository-path', default='.', envvar='INPUT_REPOSITORY-PATH', show_default=True,
              help='Path to the git repository root')
@click.option('--projects', default='**/*.csproj', envvar='INPUT_PROJECTS', show_default=True,
              help='Glob pattern or comma-separated list of project files')
@click.option('--tag-prefix', default='v', envvar='INPUT_TAG-PREFIX', show_default=True,
              help='Prefix for version tags')
@click.option('--create-global-tags/--no-create-global-tags', default=False,
              envvar='INPUT_CREATE-GLOBAL-TAGS', help='Create repository-wide tags')
@click.option('--global-tag-strategy', default='major-only', envvar='INPUT_GLOBAL-TAG-STRATEGY',
              show_default=True, help='Strategy for global tags (major-only, all, none)')
@click.option('--tag-message-template', default='Release {type} {version}',
              envvar='INPUT_TAG-MESSAGE-TEMPLATE', show_default=True,
              help='Tag message template ({version}, {project}, {type})')
@click.option('--dry-run/--no-dry-run', default=False, envvar='INPUT_DRY-RUN',
              help='Show what tags would be created without creating them')
@click.option('--fail-on-existing/--no-fail-on-existing', default=False, envvar='INPUT_FAIL-ON-EXISTING',
              help='Fail if a tag already exists')
@click.option('--include-test-projects/--exclude-test-projects', default=False,
              envvar='INPUT_INCLUDE-TEST-PROJECTS', help='Tag test projects too')
@click.option('--include-non-packable/--exclude-non-packable', default=False,
              envvar='INPUT_INCLUDE-NON-PACKABLE', help='Tag non-packable projects too')
@click.option('--only-changed/--all-projects', default=True, envvar='INPUT_ONLY-CHANGED',
              help='Only tag projects whose version changed')
@click.option('--sign-tags/--no-sign-tags', default=False, envvar='INPUT_SIGN-TAGS',
              help='GPG-sign tags (requires git config user.signingkey)')
@click.option('--json', 'output_json', is_flag=True, help='Print the run result as JSON on stdout')
@click.option('--pretty', is_flag=True, help='Display with rich formatting')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.pass_context
def create_handler(
    ctx: click.Context,
    config_path: Optional[str],
    output_json: bool,
    pretty: bool,
    debug: bool,
    **params,
):
    """
    Create git tags for monorepo projects from their computed versions.

    Versions come from the mr-version tool, one call per project file.
    Each selected project gets a tag named <project>/<prefix><version>;
    with --create-global-tags, repository-wide <prefix><version> tags
    are added according to --global-tag-strategy.

    \b
    Examples:
        # Preview what would be tagged
        monotag create --dry-run
        # Tag every changed, packable project and major releases globally
        monotag create --create-global-tags
        # Tag all projects, fail if any tag already exists
        monotag create --all-projects --fail-on-existing
    """
    try:
        config = load_config(config_path, search_dir=params['repository_path'])
        configure_logging(config, debug=debug)

        settings = _resolve_tagging_settings(ctx, config, params)
        options = TaggingOptions.from_dict(settings)

        strategy = str(options.global_tag_strategy).strip().lower()
        if strategy not in {s.value for s in GlobalTagStrategy}:
            logger.warning(f"Unknown global tag strategy '{options.global_tag_strategy}', no global tags will be created")

        logger.info("Creating version tags...")

        project_files = find_project_files(settings.get('projects', '**/*.csproj'), options.repository_path)
        logger.info(f"Found {len(project_files)} project files")

        if not project_files:
            logger.warning("No project files found matching the pattern")
            result = RunResult(dry_run=options.dry_run)
        else:
            service = TaggingService(config=config)
            progress_iter = service.run(project_files, options)
            result = _consume_progress(progress_iter, service, options.dry_run, pretty)

    except CommandError as e:
        _fail(e, output_json)
    except KeyboardInterrupt as e:
        _fail(e, output_json, "Interrupted by user")
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        _fail(e, output_json)

    write_step_outputs(step_outputs(result))
    write_job_summary(format_job_summary(result))

    if output_json:
        print(json.dumps(result.to_dict(), indent=2))
    if pretty:
        render_run_result(result)

    action = "analyzed" if options.dry_run else "created"
    logger.info(f"✅ {result.total_count} tags {action}, {result.skipped_count} skipped")


def _fail(exc: BaseException, output_json: bool, message: Optional[str] = None) -> None:
    """Report a fatal error (job summary, JSON, log) and exit with its code."""
    message = message or str(exc) or type(exc).__name__
    exit_code = get_exit_code_for_exception(exc)
    write_job_summary(format_failure_summary(message))
    if output_json:
        error = {"error": message, "type": type(exc).__name__, "exit_code": exit_code}
        print(json.dumps(error), file=sys.stderr)
    logger.error(f"Failed to create tags: {message}")
    sys.exit(exit_code)


def _consume_progress(progress_iter, service: TaggingService, dry_run: bool, pretty: bool) -> RunResult:
    """Drain the service's progress messages and return its result."""
    if pretty:
        from rich.console import Console
        from rich.markup import escape
        from rich.progress import Progress, SpinnerColumn, TextColumn

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=Console(stderr=True),
        ) as progress:
            task = progress.add_task("Processing...", total=None)
            for message in progress_iter:
                progress.update(task, description=escape(message))
    else:
        mode = "[dry run] " if dry_run else ""
        for message in progress_iter:
            print(f"{mode}{message}", file=sys.stderr)

    return service.last_result
