"""dsinit new - Create a new project scaffold."""

from pathlib import Path
from typing import Optional

import click
from rich.markup import escape
from rich.panel import Panel

from dsinit.conda import CondaError, create_env, find_env_manager
from dsinit.core.config import ConfigManager
from dsinit.core.engine import apply
from dsinit.core.entry import (
    Decision,
    InvalidProjectNameError,
    ProjectContext,
    RunResult,
    validate_project_name,
)
from dsinit.core.errors import ScaffoldError
from dsinit.git import (
    GitError,
    INITIAL_COMMIT_MESSAGE,
    SCAFFOLD_COMMIT_MESSAGE,
    clone_repo,
    commit_all,
    create_tag,
    init_repo,
    is_repo_root,
    tag_exists,
)
from dsinit.templates import TIERS, Tier, get_tier
from dsinit.ui import OutcomePrinter, Symbols, make_console, print_error, print_summary, print_warning

console = make_console()


def _validate_name(ctx, param, value: str) -> str:
    try:
        return validate_project_name(value)
    except InvalidProjectNameError as e:
        raise click.BadParameter(str(e))


@click.command()
@click.argument("name", callback=_validate_name)
@click.option(
    "--tier",
    "-t",
    type=click.Choice(list(TIERS)),
    default=None,
    help="Scaffold completeness (default from config: core)",
)
@click.option(
    "--python",
    "python_version",
    default=None,
    help="Python version for the environment (default from config)",
)
@click.option(
    "--repo",
    "repo_url",
    default=None,
    help="Clone this repository instead of starting a fresh one",
)
@click.option("--author", default=None, help="Author name for LICENSE")
@click.option(
    "--directory",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    help="Parent directory for the project",
)
@click.option(
    "--interactive/--no-interactive",
    default=False,
    help="Ask before overwriting files you may have edited",
)
@click.option("--git/--no-git", "use_git", default=None, help="Initialize and commit with git")
@click.option("--env/--no-env", "use_env", default=None, help="Create the conda environment")
def new_cmd(
    name: str,
    tier: Optional[str],
    python_version: Optional[str],
    repo_url: Optional[str],
    author: Optional[str],
    directory: Path,
    interactive: bool,
    use_git: Optional[bool],
    use_env: Optional[bool],
):
    """Create a new data-science project.

    NAME is used as the directory name and the environment name.
    Re-running on an existing project only adds what is missing.

    \b
    Tiers:
      minimal   Data folders, environment.yml, package skeleton
      core      + pyproject, starter module/test, editor config, LICENSE
      full      + pre-commit, CI workflow, Makefile, changelog, docs
    """
    cfg = ConfigManager().config
    tier_name = tier or cfg.default_tier
    try:
        selected = get_tier(tier_name)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="'--tier'")
    use_git = cfg.init_git if use_git is None else use_git
    use_env = cfg.create_env if use_env is None else use_env

    target = directory.expanduser().resolve() / name
    context = ProjectContext(
        name=name,
        python_version=python_version or cfg.python_version,
        repo_url=repo_url,
        author=author if author is not None else cfg.author,
        license=cfg.license,
    )

    console.print(Panel.fit(
        f"[title]dsinit new[/] - Creating [path]{name}[/] ({selected.name})",
        border_style="blue"
    ))

    cloned = False
    if repo_url:
        if target.exists() and any(target.iterdir()):
            console.print(f"[status.error]Error:[/] Directory '{escape(str(target))}' exists and is not empty")
            raise SystemExit(1)
        console.print(f"  [text.dim]Cloning {escape(repo_url)}...[/]")
        try:
            clone_repo(repo_url, target)
            cloned = True
        except GitError as e:
            print_warning(console, "git clone", e)
            use_git = False

    result = _scaffold(target, selected, context, interactive)

    if use_git:
        _commit(target, selected, cloned)

    env_created = False
    if use_env:
        env_created = _create_environment(target, cfg.env_manager)

    print_summary(console, result)
    console.print(f"\n[status.ok]{Symbols.OK}[/] Project ready at [path]{escape(str(target))}[/]")
    _print_next_steps(target, name, selected, cloned, env_created)


def _scaffold(target: Path, tier: Tier, context: ProjectContext, interactive: bool) -> RunResult:
    """Run the engine, exiting with status 1 on a fatal error."""
    console.print("  [text.dim]Writing scaffold...[/]")
    try:
        return apply(
            target,
            tier.entries(context),
            context,
            interactive=interactive,
            decide=_confirm_overwrite,
            reporter=OutcomePrinter(console),
        )
    except ScaffoldError as e:
        print_error(console, e)
        if e.result is not None:
            print_summary(console, e.result)
        raise SystemExit(1)


def _confirm_overwrite(path: Path) -> Decision:
    if click.confirm(f"  {path.name} already exists. Overwrite (a backup is kept)?", default=False):
        return Decision.ACCEPT
    return Decision.DECLINE


def _commit(target: Path, tier: Tier, cloned: bool) -> None:
    """Initialize (unless cloned), commit and tag. Failures are warnings."""
    try:
        if not cloned and not is_repo_root(target):
            console.print("  [text.dim]Initializing git repository...[/]")
            init_repo(target)
        message = SCAFFOLD_COMMIT_MESSAGE if cloned else INITIAL_COMMIT_MESSAGE
        committed = commit_all(target, message)
        if committed:
            console.print(f"[status.ok]{Symbols.OK}[/] Committed: {message}")
        if committed and tier.release_tag and not tag_exists(target, tier.release_tag):
            create_tag(target, tier.release_tag, f"{tier.name} scaffold")
            console.print(f"[status.ok]{Symbols.OK}[/] Tagged {tier.release_tag}")
    except GitError as e:
        print_warning(console, "git", e)


def _create_environment(target: Path, env_manager: str) -> bool:
    try:
        executable = find_env_manager(env_manager)
        console.print(f"  [text.dim]Creating environment with {executable} (this can take a while)...[/]")
        create_env(target, executable=executable)
    except CondaError as e:
        print_warning(console, "environment creation", e)
        return False
    console.print(f"[status.ok]{Symbols.OK}[/] Environment created")
    return True


def _print_next_steps(target: Path, name: str, tier: Tier, cloned: bool, env_created: bool):
    """Print next steps after creation."""
    steps = [f"cd {name if target.parent == Path.cwd().resolve() else target}"]
    if not env_created:
        steps.append("conda env create -f environment.yml")
    steps.append(f"conda activate {name}")
    if tier.name != "minimal":
        steps.append('pip install -e ".[dev]"')
    if tier.name == "full":
        steps.append("pre-commit install")
    if cloned:
        steps.append("git push")
    else:
        steps.append("git remote add origin <url> && git push -u origin main")

    console.print("\n[bold]Next steps:[/]")
    for step in steps:
        console.print(f"  {Symbols.ARROW_RIGHT} {step}", style="hint", markup=False, highlight=False)
