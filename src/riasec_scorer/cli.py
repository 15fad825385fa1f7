"""CLI for the RIASEC Scoring Engine.

Provides command-line interface for scoring questionnaires and matching
profiles against the career catalog.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from career_catalog.catalog import catalog_areas, get_career, search_careers, validate_catalog
from career_catalog.schema import CareerEntry, Dimension

from .config import find_config_file, load_config
from .engine import ScoringEngine, validate_responses_file
from .questionnaire import (
    DIMENSION_DESCRIPTIONS,
    QUESTIONS,
    SCALE_LABELS,
    questions_by_dimension,
)
from .ranker import tied_groups
from .schema import (
    CertaintyLevel,
    CompatibilityReport,
    ProfileResult,
    RecommendationConstraints,
    RecommendationResult,
)

console = Console()

CERTAINTY_COLORS = {
    CertaintyLevel.HIGH: "green",
    CertaintyLevel.MEDIUM: "yellow",
    CertaintyLevel.EXPLORATORY: "cyan",
}


@click.group()
@click.version_option(version="1.0.0", prog_name="riasec-scorer")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    help="Path to scorer-config.yaml (default: auto-discovered)"
)
def main(config_path: Optional[str]):
    """RIASEC Scoring and Career Recommendation Engine.

    Scores the 36-item Holland questionnaire into a three-letter profile
    and ranks catalog careers by compatibility with it.
    """
    path = Path(config_path) if config_path else find_config_file()
    if path:
        load_config(path)


@main.command("score")
@click.option(
    "--responses", "-r",
    required=True,
    type=click.Path(exists=True),
    help="Path to responses JSON file (item id -> answer 1-5)"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show intensity/rejection counts and tie-breaks"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
def score_cmd(responses: str, out: Optional[str], verbose: bool, json_output: bool):
    """Score a completed questionnaire.

    Examples:
        riasec-scorer score -r responses.json
        riasec-scorer score -r responses.json -v -o profile.json
    """
    try:
        engine = ScoringEngine()
        result = engine.score(responses)

        if json_output:
            output_json(result, out)
            return

        display_profile(result, engine, verbose)
        if out:
            output_json(result, out)
            console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("recommend")
@click.option(
    "--catalog", "-c",
    required=True,
    type=click.Path(exists=True),
    help="Path to career-catalog.json"
)
@click.option(
    "--code",
    help="User Holland code (e.g. ISA)"
)
@click.option(
    "--responses", "-r",
    type=click.Path(exists=True),
    help="Score this responses file and use its code"
)
@click.option(
    "--top-n", "-n",
    type=int,
    help="Maximum number of recommendations (default from config: 6)"
)
@click.option(
    "--min-score",
    type=click.IntRange(0, 100),
    help="Minimum compatibility score"
)
@click.option(
    "--area", "-a",
    "areas",
    multiple=True,
    help="Restrict to this area (repeatable)"
)
@click.option(
    "--max-duration",
    type=float,
    help="Maximum program duration in years"
)
@click.option(
    "--min-employability",
    type=click.Choice(["Low", "Medium", "High", "Very High"], case_sensitive=False),
    help="Minimum employability tier"
)
@click.option(
    "--min-salary",
    type=float,
    help="Minimum average salary"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show exclusions and match details"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
def recommend_cmd(
    catalog: str,
    code: Optional[str],
    responses: Optional[str],
    top_n: Optional[int],
    min_score: Optional[int],
    areas: tuple,
    max_duration: Optional[float],
    min_employability: Optional[str],
    min_salary: Optional[float],
    out: Optional[str],
    verbose: bool,
    json_output: bool,
):
    """Recommend careers for a Holland code.

    Examples:
        riasec-scorer recommend -c career-catalog.json --code ISA
        riasec-scorer recommend -c career-catalog.json -r responses.json -n 3
        riasec-scorer recommend -c career-catalog.json --code ISA -a Tecnología -a Salud
    """
    if not code and not responses:
        console.print("[yellow]Please specify --code or --responses[/yellow]")
        sys.exit(1)

    try:
        engine = ScoringEngine()
        engine.load_catalog(catalog)

        if not code:
            code = engine.score(responses).holland_code

        constraint_fields = {
            "top_n": top_n,
            "min_score": min_score,
            "areas": set(areas) if areas else None,
            "max_duration": max_duration,
            "min_employability": min_employability,
            "min_salary": min_salary,
        }
        constraints = RecommendationConstraints(
            **{k: v for k, v in constraint_fields.items() if v is not None}
        )

        result = engine.recommend(code, constraints)

        if json_output:
            output_json(result, out)
            return

        console.print(f"\n[bold blue]Career Recommendations[/bold blue]")
        console.print(f"Catalog: {catalog} ({engine.catalog.total_careers} careers)")
        console.print()
        display_recommendations(result, engine, verbose)
        if out:
            output_json(result, out)
            console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("compatibility")
@click.argument("user_code")
@click.argument("career_code")
def compatibility_cmd(user_code: str, career_code: str):
    """Compute the compatibility score between two Holland codes.

    Example:
        riasec-scorer compatibility ISA SIA
    """
    try:
        engine = ScoringEngine()
        score = engine.compatibility(user_code, career_code)
        console.print(f"{user_code.upper()} vs {career_code.upper()}: [bold]{score}[/bold]/100")
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("report")
@click.option(
    "--catalog", "-c",
    required=True,
    type=click.Path(exists=True),
    help="Path to career-catalog.json"
)
@click.option(
    "--code",
    required=True,
    help="User Holland code"
)
@click.option(
    "--id", "career_id",
    required=True,
    type=int,
    help="Career ID to compare against"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
def report_cmd(catalog: str, code: str, career_id: int, json_output: bool):
    """Show a detailed compatibility report for one career."""
    try:
        engine = ScoringEngine()
        engine.load_catalog(catalog)
        report = engine.report(code, career_id)

        if report is None:
            console.print(f"[red]Career not found: {career_id}[/red]")
            sys.exit(1)

        if json_output:
            output_json(report, None)
        else:
            display_report(report)

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("questions")
@click.option(
    "--dimension", "-d",
    type=click.Choice([d.value for d in Dimension], case_sensitive=False),
    help="Only show items of this dimension"
)
def questions_cmd(dimension: Optional[str]):
    """List the questionnaire items."""
    if dimension:
        selected = Dimension(dimension.upper())
        items = questions_by_dimension(selected)
        info = DIMENSION_DESCRIPTIONS[selected]
        console.print(Panel(
            f"{info['summary']}\n\n"
            f"Traits: {', '.join(info['traits'])}\n"
            f"Environments: {', '.join(info['environments'])}",
            title=f"{selected.value} - {selected.label}",
        ))
    else:
        items = list(QUESTIONS)

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Dim")
    table.add_column("Statement")

    for item in items:
        table.add_row(str(item.id), item.dimension.value, item.text)

    console.print(table)
    console.print(
        "\n[dim]Scale: "
        + ", ".join(f"{k} = {v}" for k, v in SCALE_LABELS.items())
        + "[/dim]"
    )


@main.command("validate")
@click.option(
    "--catalog", "-c",
    type=click.Path(),
    help="Path to career-catalog.json"
)
@click.option(
    "--responses", "-r",
    type=click.Path(),
    help="Path to responses JSON file"
)
def validate_cmd(catalog: Optional[str], responses: Optional[str]):
    """Validate catalog and/or responses files.

    Examples:
        riasec-scorer validate -c career-catalog.json
        riasec-scorer validate -r responses.json
    """
    if not catalog and not responses:
        console.print("[yellow]Please specify --catalog and/or --responses to validate[/yellow]")
        return

    all_valid = True

    checks = []
    if catalog:
        checks.append(("Catalog", catalog, validate_catalog))
    if responses:
        checks.append(("Responses", responses, validate_responses_file))

    for label, path, validator in checks:
        is_valid, issues = validator(path)
        if is_valid:
            console.print(f"[green]✓ {label} valid: {path}[/green]")
        else:
            console.print(f"[red]✗ {label} invalid: {path}[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False

    sys.exit(0 if all_valid else 1)


@main.command("inspect")
@click.option(
    "--catalog", "-c",
    required=True,
    type=click.Path(exists=True),
    help="Path to career-catalog.json"
)
@click.option(
    "--id", "career_id",
    type=int,
    help="Show details for specific career ID"
)
@click.option(
    "--area", "-a",
    help="Filter by area"
)
@click.option(
    "--search", "-s",
    help="Search careers by name"
)
def inspect_cmd(catalog: str, career_id: Optional[int], area: Optional[str], search: Optional[str]):
    """Inspect the career catalog."""
    try:
        engine = ScoringEngine()
        cat = engine.load_catalog(catalog)

        console.print(f"\n[bold blue]Career Catalog[/bold blue]")
        console.print(f"Version: {cat.version}")
        console.print(f"Total Careers: {cat.total_careers}")
        console.print(f"Areas: {', '.join(catalog_areas(cat)) or '-'}")
        console.print()

        if career_id is not None:
            career = get_career(cat, career_id)
            if not career:
                console.print(f"[red]Career not found: {career_id}[/red]")
                return
            display_career_detail(career)
            return

        filtered = search_careers(cat, search) if search else cat.careers
        if area:
            filtered = [c for c in filtered if c.area.lower() == area.lower()]

        console.print(f"Showing {len(filtered)} careers:\n")

        table = Table(show_header=True, header_style="bold")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Name")
        table.add_column("Code")
        table.add_column("Area")
        table.add_column("Years", justify="right")
        table.add_column("Employability")

        for career in filtered[:30]:
            table.add_row(
                str(career.id),
                career.name[:40],
                career.holland_code,
                career.area,
                f"{career.duration_years:g}" if career.duration_years is not None else "-",
                career.employability.value if career.employability else "-",
            )

        console.print(table)

        if len(filtered) > 30:
            console.print(f"\n[dim]... and {len(filtered) - 30} more[/dim]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def display_profile(result: ProfileResult, engine: ScoringEngine, verbose: bool):
    """Display a scored profile in formatted text."""
    interpretation = engine.interpret(result)
    color = CERTAINTY_COLORS.get(result.certainty, "white")

    console.print(Panel(
        f"Holland Code: [bold cyan]{result.holland_code}[/bold cyan]\n"
        f"Profile: [bold]{interpretation.profile_label}[/bold]\n"
        f"Certainty: [{color}]{result.certainty.value}[/{color}]\n\n"
        f"{interpretation.certainty_message}",
        title="RIASEC Profile",
    ))

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Dimension")
    table.add_column("Score", justify="right")
    if verbose:
        table.add_column("Intensity", justify="right")
        table.add_column("Rejection", justify="right")

    for rank, entry in enumerate(result.ranking, 1):
        row = [str(rank), f"{entry.dimension.value} {entry.dimension.label}", str(entry.score)]
        if verbose:
            row += [str(entry.intensity), str(entry.rejection)]
        table.add_row(*row)

    console.print(table)

    console.print(f"\n[bold]Strengths:[/bold] {', '.join(interpretation.strengths)}")

    if verbose:
        for group in tied_groups(result.ranking):
            letters = ", ".join(d.value for d in group)
            console.print(f"[dim]Tie-break applied: {letters}[/dim]")


def display_recommendations(result: RecommendationResult, engine: ScoringEngine, verbose: bool):
    """Display recommendation results in formatted text."""
    stats = result.statistics

    console.print(Panel(
        f"Profile Code: [bold cyan]{result.profile_code}[/bold cyan]\n"
        f"Best Match: [bold]{stats.best_match_name if stats else 'None'}[/bold]"
        f"{f' ({stats.best_match_score})' if stats else ''}\n"
        f"Eligible: {result.eligible_count} | Excluded: {result.excluded_count}",
        title="Recommendation Summary",
    ))

    if not result.recommendations:
        console.print("\n[yellow]No careers matched the given constraints.[/yellow]")
    else:
        console.print("\n[bold]Top Recommendations:[/bold]\n")

    for i, rec in enumerate(result.recommendations, 1):
        career = rec.career
        console.print(
            f"  [bold cyan]{i}. {career.name}[/bold cyan] "
            f"[bold]{rec.compatibility_score}%[/bold] [dim]{career.holland_code} · {career.area}[/dim]"
        )
        console.print(f"     {rec.rationale}")
        if verbose:
            console.print(f"     ID: {career.id}")
            if career.duration_years is not None:
                console.print(f"     Duration: {career.duration_years:g} years")
            if career.employability:
                console.print(f"     Employability: {career.employability.value}")
        console.print()

    if stats and verbose:
        console.print("[bold]Statistics:[/bold]")
        console.print(f"  Average score: {stats.average_score}")
        console.print(f"  Areas: {', '.join(stats.areas_represented)}")
        if stats.average_employability:
            console.print(f"  Average employability: {stats.average_employability.value}")
        if stats.average_salary is not None:
            console.print(f"  Average salary: {stats.average_salary:,}")

    if verbose and result.excluded:
        console.print(f"\n[dim]{engine.explainer.format_exclusion_summary(result.excluded)}[/dim]")

    if result.processing_warnings:
        console.print("\n[dim]Warnings:[/dim]")
        for warning in result.processing_warnings:
            console.print(f"  [dim]• {warning}[/dim]")


def display_report(report: CompatibilityReport):
    """Display a compatibility report."""
    tree = Tree(
        f"[bold cyan]{report.career.name}[/bold cyan] "
        f"{report.user_code} vs {report.career_code}: [bold]{report.score}[/bold] ({report.level})"
    )
    tree.add(report.rationale)

    if report.matches:
        matches = tree.add("[bold]Matches[/bold]")
        for m in report.matches:
            if m.user_position == m.career_position:
                matches.add(f"{m.name}: same position ({m.user_position})")
            else:
                matches.add(f"{m.name}: yours #{m.user_position}, career #{m.career_position}")

    differences = report.differences
    if differences.user_only or differences.career_only:
        diff = tree.add("[bold]Differences[/bold]")
        if differences.user_only:
            diff.add("Only yours: " + ", ".join(d.label for d in differences.user_only))
        if differences.career_only:
            diff.add("Only the career's: " + ", ".join(d.label for d in differences.career_only))

    console.print(tree)


def display_career_detail(career: CareerEntry):
    """Display detailed career information."""
    tree = Tree(f"[bold cyan]{career.name}[/bold cyan]")

    identity = tree.add("[bold]Identity[/bold]")
    identity.add(f"ID: {career.id}")
    identity.add(f"Area: {career.area or '-'}")
    if career.description:
        identity.add(career.description)

    code = tree.add(f"[bold]Holland Code[/bold]: {career.holland_code}")
    if career.has_valid_code():
        for letter in career.holland_code:
            code.add(f"{letter} - {Dimension(letter).label}")

    outlook = tree.add("[bold]Outlook[/bold]")
    if career.duration_years is not None:
        outlook.add(f"Duration: {career.duration_years:g} years")
    if career.average_salary is not None:
        outlook.add(f"Average salary: {career.average_salary:,.0f}")
    outlook.add(f"Employability: {career.employability.value if career.employability else 'unknown'}")

    console.print(tree)


def output_json(result, out_path: Optional[str]):
    """Output a pydantic result as JSON."""
    json_str = result.model_dump_json(indent=2)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="scorer-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default scorer configuration file.

    Example:
        riasec-scorer init-config --out my-config.yaml
    """
    from .config import save_default_config

    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nThis file configures:")
        console.print("  • certainty_thresholds - Average score gaps for High/Medium certainty")
        console.print("  • compatibility_weights - Points per matching letter")
        console.print("  • compatibility_levels - Score bands for report labels")
        console.print("  • recommendation_defaults - Default top N and minimum score")
        console.print("\nThe scorer will look for config in this order:")
        console.print("  1. RIASEC_SCORER_CONFIG environment variable")
        console.print("  2. ./scorer-config.yaml (current directory)")
        console.print("  3. ~/.config/riasec-scorer/config.yaml")
    except Exception as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
