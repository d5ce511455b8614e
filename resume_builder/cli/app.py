"""CLI - Command line interface for Resume Builder."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from resume_builder.config import ConfigError, Severity, has_errors, load_config, load_raw_config, validate_config
from resume_builder.contracts import TEMPLATE_OPTIONS
from resume_builder.domain import (
    RenderSection,
    bullet_guidance,
    format_ats_report,
    split_columns,
    template_style_hint,
)
from resume_builder.errors import BuilderError
from resume_builder.observability import setup_logging
from resume_builder.session import BuilderSession
from resume_builder.storage import JsonFileKeyValueStore, KeyValueStore
from resume_builder.workflow import (
    ArtifactOutcome,
    ArtifactStore,
    SubmissionLinksStore,
    WorkflowStateMachine,
    format_submission_summary,
    step_by_ordinal,
)

console = Console()

SECTIONS = ("education", "experience", "projects")
LINK_OPTIONS = {
    "build": "primary_build_link",
    "repo": "source_repo_link",
    "deploy": "deployed_link",
}


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="resume-builder", description="Resume Builder")
    parser.add_argument("--config", help="Path to config YAML (default: config/config.yaml)")
    parser.add_argument("--store", help="Path to the JSON store file (overrides config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable info logging")
    commands = parser.add_subparsers(dest="command", required=True)

    draft = commands.add_parser("draft", help="Edit, score and export the resume draft")
    draft_cmds = draft.add_subparsers(dest="action", required=True)
    draft_cmds.add_parser("show", help="Show the live preview")
    draft_cmds.add_parser("entries", help="List entry ids per section")
    set_cmd = draft_cmds.add_parser("set", help="Set a personal-info or link field")
    set_cmd.add_argument("field")
    set_cmd.add_argument("value")
    add_cmd = draft_cmds.add_parser("add", help="Add a blank entry")
    add_cmd.add_argument("section", choices=SECTIONS)
    edit_cmd = draft_cmds.add_parser("edit", help="Edit one field of an entry")
    edit_cmd.add_argument("section", choices=SECTIONS)
    edit_cmd.add_argument("entry_id")
    edit_cmd.add_argument("field")
    edit_cmd.add_argument("value")
    remove_cmd = draft_cmds.add_parser("remove", help="Remove an entry")
    remove_cmd.add_argument("section", choices=SECTIONS)
    remove_cmd.add_argument("entry_id")
    skills_cmd = draft_cmds.add_parser("skills", help="Replace a skill category (comma-separated)")
    skills_cmd.add_argument("category", choices=("technical", "soft", "tools"))
    skills_cmd.add_argument("text")
    draft_cmds.add_parser("sample", help="Replace the draft with sample data")
    draft_cmds.add_parser("clear", help="Reset the draft")
    draft_cmds.add_parser("score", help="Show the readiness score")
    draft_cmds.add_parser("guidance", help="Show bullet guidance")
    export_cmd = draft_cmds.add_parser("export", help="Export the draft as plain text")
    export_cmd.add_argument("--output", help="Write to this file instead of stdout")
    template_cmd = draft_cmds.add_parser("template", help="Show or choose the template")
    template_cmd.add_argument("name", nargs="?", choices=TEMPLATE_OPTIONS)

    steps = commands.add_parser("steps", help="Guided build track")
    steps_cmds = steps.add_subparsers(dest="action", required=True)
    steps_cmds.add_parser("list", help="List stages and their lock state")
    show_cmd = steps_cmds.add_parser("show", help="Open a stage")
    show_cmd.add_argument("stage", type=int)
    commit_cmd = steps_cmds.add_parser("commit", help="Commit artifact evidence for a stage")
    commit_cmd.add_argument("stage", type=int)
    commit_cmd.add_argument("--notes", default="")
    commit_cmd.add_argument("--outcome", choices=("worked", "error"), default="")
    commit_cmd.add_argument("--attachment", default="", help="Display name of a screenshot")

    proof = commands.add_parser("proof", help="Final submission")
    proof_cmds = proof.add_subparsers(dest="action", required=True)
    links_cmd = proof_cmds.add_parser("links", help="Show or update submission links")
    for option in LINK_OPTIONS:
        links_cmd.add_argument(f"--{option}")
    proof_cmds.add_parser("summary", help="Print the final submission summary")

    return parser


# ---------------------------------------------------------------------------
# Draft commands
# ---------------------------------------------------------------------------


def _print_sections(sections: List[RenderSection], out: Console) -> None:
    for column, column_sections in split_columns(sections).items():
        if not column_sections:
            continue
        if column == "sidebar":
            out.print("[dim]-- sidebar --[/dim]")
        for section in column_sections:
            body = []
            for item in section.items:
                body.append(f"[bold]{escape(item.heading)}[/bold]" if item.heading else "")
                body.extend(f"  {escape(detail)}" for detail in item.details)
            out.print(Panel("\n".join(body), title=section.title, expand=False))


def handle_draft(args: argparse.Namespace, session: BuilderSession, out: Console) -> int:
    action = args.action
    if action == "show":
        out.print(f"Template: {session.template} ({template_style_hint(session.template)})")
        _print_sections(session.sections(), out)
    elif action == "entries":
        table = Table(title="Entries")
        table.add_column("Section")
        table.add_column("Id")
        table.add_column("Content")
        for section in SECTIONS:
            for entry in getattr(session.draft, section):
                values = [v for k, v in entry.model_dump().items() if k != "id" and isinstance(v, str) and v.strip()]
                table.add_row(section, entry.id, " | ".join(values) or "(blank)")
        out.print(table)
    elif action == "set":
        session.set_field(args.field, args.value)
        out.print(f"[green]✓[/green] {args.field} updated")
    elif action == "add":
        entry = session.add_entry(args.section)
        out.print(f"[green]✓[/green] Added {args.section} entry {entry.id}")
    elif action == "edit":
        session.update_entry(args.section, args.entry_id, args.field, args.value)
        out.print(f"[green]✓[/green] {args.section} {args.entry_id} {args.field} updated")
    elif action == "remove":
        session.remove_entry(args.section, args.entry_id)
        out.print(f"[green]✓[/green] Removed {args.section} entry {args.entry_id}")
    elif action == "skills":
        skills = session.set_skills(args.category, args.text)
        out.print(f"[green]✓[/green] {len(skills)} {args.category} skill(s) saved")
    elif action == "sample":
        session.load_sample()
        out.print("[green]✓[/green] Sample data loaded")
    elif action == "clear":
        session.clear()
        out.print("[green]✓[/green] Draft cleared")
    elif action == "score":
        result = session.score()
        out.print(Markdown(format_ats_report(result)))
        improvements = session.top_improvements()
        if improvements:
            out.print("\n[bold]Top 3 Improvements[/bold]")
            for line in improvements:
                out.print(f"- {line}")
    elif action == "guidance":
        _print_guidance(session, out)
    elif action == "export":
        payload = session.export_text()
        if payload.warning:
            out.print(f"[yellow]{payload.warning}[/yellow]")
        if args.output:
            Path(args.output).write_text(payload.text + "\n", encoding="utf-8")
            out.print(f"[green]✓[/green] Wrote {len(payload.text)} characters to {args.output}")
        else:
            out.print(payload.text, markup=False, highlight=False, soft_wrap=True)
    elif action == "template":
        if args.name:
            session.set_template(args.name)
        out.print(f"Template: {session.template} ({template_style_hint(session.template)})")
    return 0


def _print_guidance(session: BuilderSession, out: Console) -> None:
    found = False
    for label, texts in (
        ("Experience", [entry.bullet for entry in session.draft.experience]),
        ("Projects", [entry.description for entry in session.draft.projects]),
    ):
        for index, text in enumerate(texts, 1):
            hints = bullet_guidance(text)
            if hints:
                found = True
                out.print(f"[bold]{label} #{index}[/bold]: {'; '.join(hints)}")
    if not found:
        out.print("[green]No bullet guidance.[/green]")


# ---------------------------------------------------------------------------
# Workflow commands
# ---------------------------------------------------------------------------


def handle_steps(args: argparse.Namespace, machine: WorkflowStateMachine, out: Console) -> int:
    if args.action == "list":
        table = Table(title=f"Build Track - {machine.status()}")
        table.add_column("#", justify="right")
        table.add_column("Stage")
        table.add_column("Status")
        table.add_column("Access")
        for step, complete in machine.stage_statuses():
            table.add_row(
                str(step.ordinal),
                step.title,
                "Complete" if complete else "Pending",
                "open" if machine.is_unlocked(step.ordinal) else "locked",
            )
        out.print(table)
        return 0

    destination = machine.resolve_stage(args.stage)
    if destination.is_proof:
        out.print(f"[yellow]Stage {args.stage} does not exist; all stages are complete, see `proof summary`.[/yellow]")
        return 1
    if destination.redirected:
        out.print(f"[yellow]Stage {args.stage} is not available; continue at stage {destination.ordinal}.[/yellow]")
        if args.action == "commit":
            return 1

    step = step_by_ordinal(destination.ordinal or 1, machine.steps)
    if step is None:
        out.print(f"[red]Error:[/red] unknown stage {args.stage}")
        return 2

    if args.action == "show":
        artifact = machine.artifacts.get(step.ordinal)
        lines = [step.subtitle, "", f"[bold]Prompt[/bold]: {step.prompt_text}", ""]
        if artifact is not None and artifact.is_committed:
            lines.append(f"Artifact uploaded at {artifact.committed_at}")
            if artifact.attachment_name:
                lines.append(f"Screenshot: {artifact.attachment_name}")
        else:
            lines.append("Artifact not uploaded yet.")
        out.print(Panel("\n".join(lines), title=f"{step.ordinal}/{len(machine.steps)} {step.title}", expand=False))
        return 0

    artifact = machine.commit(
        step.ordinal,
        notes=args.notes,
        outcome=ArtifactOutcome(args.outcome),
        attachment_name=args.attachment,
    )
    if artifact is None:
        out.print("[yellow]Nothing to commit: add notes, an outcome or an attachment.[/yellow]")
        return 1
    out.print(f"[green]✓[/green] Stage {step.ordinal} artifact committed at {artifact.committed_at}")
    following = machine.next_destination(step.ordinal)
    if following is not None:
        out.print(f"Next: {following.route}")
    return 0


def handle_proof(
    args: argparse.Namespace,
    machine: WorkflowStateMachine,
    links_store: SubmissionLinksStore,
    out: Console,
) -> int:
    if args.action == "links":
        for option, field_name in LINK_OPTIONS.items():
            value = getattr(args, option)
            if value is not None:
                links_store.update(field_name, value)
        table = Table(title="Submission Links")
        table.add_column("Link")
        table.add_column("Value")
        for option, field_name in LINK_OPTIONS.items():
            table.add_row(option, getattr(links_store.links, field_name) or "N/A")
        out.print(table)
        return 0

    destination = machine.resolve_proof()
    if not destination.is_proof:
        out.print(f"[yellow]Finish stage {destination.ordinal} before submitting.[/yellow]")
        return 1
    summary = format_submission_summary(machine.stage_statuses(), links_store.links)
    out.print(summary, markup=False, highlight=False, soft_wrap=True)
    return 0


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def _report_config_issues(issues: List[ConfigError], out: Console) -> None:
    for issue in issues:
        color = "red" if issue.severity == Severity.ERROR else "yellow"
        out.print(f"[{color}]{issue.severity.value}[/{color}] {issue.field}: {escape(issue.message)}")


def run(
    argv: Optional[Sequence[str]] = None,
    store: Optional[KeyValueStore] = None,
    out: Optional[Console] = None,
) -> int:
    """Parse *argv* and dispatch. Returns the process exit code."""
    out = out or console
    args = build_parser().parse_args(argv)

    try:
        raw_config = load_raw_config(args.config)
    except (OSError, ValueError) as e:
        out.print(f"[red]Error:[/red] {escape(str(e))}")
        return 2
    if args.store:
        raw_config["storage_path"] = args.store
    issues = validate_config(raw_config)
    if issues:
        _report_config_issues(issues, out)
    if has_errors(issues):
        return 2

    config = load_config(args.config)
    if args.store:
        config.storage_path = args.store
    setup_logging(args.verbose or config.verbose)

    if store is None:
        store = JsonFileKeyValueStore(config.storage_path)

    try:
        if args.command == "draft":
            return handle_draft(args, BuilderSession(store, config.default_template), out)
        machine = WorkflowStateMachine(ArtifactStore(store))
        if args.command == "steps":
            return handle_steps(args, machine, out)
        return handle_proof(args, machine, SubmissionLinksStore(store), out)
    except BuilderError as e:
        out.print(f"[red]Error:[/red] {escape(e.message)}")
        return 2


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
