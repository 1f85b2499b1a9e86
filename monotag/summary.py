"""
CI step outputs and job summary for monotag.

When running inside GitHub Actions the run result is published two ways:

- Step outputs appended to ``$GITHUB_OUTPUT`` (tags-created,
  global-tags-created, project-tags-created, tags-count, tags-skipped)
- A markdown report appended to ``$GITHUB_STEP_SUMMARY``

Outside Actions the same data is available through ``step_outputs()``
and ``format_job_summary()``.
"""

import json
import os
import uuid
from pathlib import Path
from typing import Dict, List, Optional

from .domain.operation import RunResult, TagOutcome
from .render import status_label


def step_outputs(result: RunResult) -> Dict[str, str]:
    """Serialize a run into the step output values."""
    return {
        'tags-created': json.dumps([t.to_dict() for t in result.tags]),
        'global-tags-created': json.dumps([t.to_dict() for t in result.global_tags]),
        'project-tags-created': json.dumps([t.to_dict() for t in result.project_tags]),
        'tags-count': str(result.total_count),
        'tags-skipped': str(result.skipped_count),
    }


def write_step_outputs(outputs: Dict[str, str], output_path: Optional[str] = None) -> bool:
    """
    Append outputs to the GitHub Actions output file.

    Multiline values use the heredoc form. Returns False when there is
    no output file to write to.
    """
    output_path = output_path or os.environ.get('GITHUB_OUTPUT')
    if not output_path:
        return False

    with Path(output_path).open('a', encoding='utf-8') as fh:
        for name, value in outputs.items():
            if '\n' in value:
                delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
                fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                fh.write(f"{name}={value}\n")
    return True


def _tag_line(tag: TagOutcome, detail: str) -> str:
    owner = "Global" if tag.is_global else tag.project_name
    return f"- **{tag.tag_name}** ({owner}) - {detail}"


def _details(summary: str, body: str) -> List[str]:
    return [f"<details><summary>{summary}</summary>", "", body, "", "</details>", ""]


def format_job_summary(result: RunResult) -> str:
    """Render a run as a markdown job summary."""
    dry_run = result.dry_run
    lines = [f"## Tag Creation {'Analysis' if dry_run else 'Results'}", ""]

    stats = "\n".join([
        f"- **Total Projects**: {result.project_count}",
        f"- **Tags {'Analyzed' if dry_run else 'Created'}**: {result.total_count}",
        f"- **Project Tags**: {len(result.project_tags)}",
        f"- **Global Tags**: {len(result.global_tags)}",
        f"- **Skipped Tags**: {result.skipped_count}",
        f"- **Mode**: {'Dry Run' if dry_run else 'Live'}",
    ])
    lines += _details("Summary Statistics", stats)

    if result.created:
        body = "\n".join(_tag_line(t, f"`{t.version}`") for t in result.created)
        lines += _details("Successfully Created Tags", body)

    if result.skipped:
        body = "\n".join(_tag_line(t, f"_{t.reason}_") for t in result.skipped)
        lines += _details("Skipped Tags", body)

    if result.failed:
        body = "\n".join(_tag_line(t, f"_{t.reason}_") for t in result.failed)
        lines += _details("Failed Tags", body)

    if result.tags:
        rows = [
            "| Tag | Type | Project | Version | Status |",
            "|-----|------|---------|---------|--------|",
        ]
        for tag in result.tags:
            rows.append(
                f"| `{tag.tag_name}` | {tag.scope} | {tag.project_name} | `{tag.version}` | {status_label(tag)} |"
            )
        lines += _details("Detailed Tag Information", "\n".join(rows))

    if dry_run:
        lines += [
            "> **Dry Run Mode** - No tags were actually created. "
            "This was a preview of what would happen.",
            "",
        ]

    return "\n".join(lines)


def format_failure_summary(message: str) -> str:
    """Render a fatal error as a markdown job summary."""
    return "\n".join(
        ["## Tag Creation Failed", ""]
        + _details("Error Details", f"```\n{message}\n```")
    )


def write_job_summary(markdown: str, summary_path: Optional[str] = None) -> bool:
    """Append markdown to ``$GITHUB_STEP_SUMMARY``; False when unset."""
    summary_path = summary_path or os.environ.get('GITHUB_STEP_SUMMARY')
    if not summary_path:
        return False

    with Path(summary_path).open('a', encoding='utf-8') as fh:
        fh.write(markdown)
        if not markdown.endswith('\n'):
            fh.write('\n')
    return True
