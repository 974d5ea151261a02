from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(
    name="perfgate", help="Assert performance audit reports against thresholds"
)
schema_app = typer.Typer(name="schema", help="Generate schema tooling")
app.add_typer(schema_app, name="schema")


def _format_values(values: list[float]) -> str:
    return ", ".join(f"{v:g}" for v in values)


@app.command("assert")
def assert_(
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to assert config (YAML/JSON or rc file)"
    ),
    reports_dir: str = typer.Option(
        ".lighthouseci", "--reports-dir", help="Directory holding lhr-*.json reports"
    ),
    preset: str | None = typer.Option(
        None, "--preset", help="Preset to assert with, e.g. lighthouse:recommended"
    ),
    budgets_file: str | None = typer.Option(
        None, "--budgets-file", help="Lighthouse budgets JSON to assert with"
    ),
    junit: str | None = typer.Option(
        None, "--junit", help="Write violations to this junit.xml path"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(
        None, "--debug-log", help="Append debug output to this file"
    ),
):
    """Assert collected reports and exit non-zero on error-level violations."""
    from pydantic import ValidationError

    from perfgate.budgets import resolve_budgets_file
    from perfgate.config import AssertConfig, load_config
    from perfgate.reports import load_reports
    from perfgate.runner import evaluate
    from perfgate.verbose import setup_logger

    logger = setup_logger(
        Path(debug_log) if debug_log else None, verbose=verbose
    )

    try:
        if config is not None:
            config_path = Path(config)
            if not config_path.exists():
                typer.echo(f"Error: config file not found: {config}", err=True)
                raise typer.Exit(1)
            assert_config = load_config(config_path)
        else:
            assert_config = AssertConfig()

        if preset is not None:
            assert_config.preset = preset
        if budgets_file is not None:
            assert_config.budgets_file = budgets_file
        assert_config = resolve_budgets_file(assert_config)

        if not (
            assert_config.assertions
            or assert_config.preset
            or assert_config.assert_matrix
        ):
            typer.echo(
                "Error: no assertions to use "
                "(pass --config, --preset or --budgets-file)",
                err=True,
            )
            raise typer.Exit(1)

        reports = load_reports(Path(reports_dir))
        if not reports:
            typer.echo(f"Error: no reports found in {reports_dir}", err=True)
            raise typer.Exit(1)

        logger.debug(f"Asserting {len(reports)} report(s) from {reports_dir}")
        results = evaluate(assert_config, reports)
    except (ValueError, ValidationError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for url in dict.fromkeys(r.url for r in results):
        typer.echo(f"\n{url}")
        for r in (r for r in results if r.url == url):
            audit = r.audit_id or ""
            if r.audit_property:
                audit = f"{audit}.{r.audit_property}"
            typer.echo(f"  [{r.level}] {audit} failure for {r.name.value} assertion")
            if r.audit_title:
                typer.echo(f"      {r.audit_title}")
            if r.audit_documentation_link:
                typer.echo(f"      Documentation: {r.audit_documentation_link}")
            typer.echo(f"        expected: {r.operator}{r.expected:g}")
            typer.echo(f"           found: {r.actual:g}")
            typer.echo(f"      all values: {_format_values(r.values)}")

    if junit is not None:
        from perfgate.reporting.junit import write_junit

        junit_path = write_junit(Path(junit), results)
        typer.echo(f"JUnit report: {junit_path}")

    errors = [r for r in results if r.level == "error"]
    warnings = [r for r in results if r.level == "warn"]
    if not results:
        typer.echo("All results processed!")
    else:
        typer.echo(
            f"\n{len(errors)} error(s), {len(warnings)} warning(s) "
            f"across {len({r.url for r in results})} URL(s)"
        )

    if errors:
        raise typer.Exit(1)


@app.command()
def presets():
    """List the bundled assertion presets."""
    from perfgate.presets import PRESET_PREFIX, available_presets

    for name in available_presets():
        typer.echo(f"{PRESET_PREFIX}{name}")


@schema_app.command("generate")
def schema_generate(
    out: str = typer.Option(
        "schemas/perfgate.schema.json", help="Output path for JSON Schema"
    ),
):
    """Generate JSON Schema for the assert config format."""
    from perfgate.schema import write_json_schema

    out_path = Path(out)
    write_json_schema(out_path)
    typer.echo(f"Wrote schema: {out_path}")
