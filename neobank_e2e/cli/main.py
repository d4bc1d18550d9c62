"""NeoBank E2E suite CLI entry point."""

import sys
from typing import Optional, Tuple

import click

from neobank_e2e.cli.context import CLIContext, setup_logging
from neobank_e2e.cli.runner import (
    ALLURE_REPORT_DIR,
    ALLURE_RESULTS_DIR,
    SUITE_ARGS,
    SUITE_DESCRIPTIONS,
    ReportToolMissing,
    RunConfig,
    SuiteRunner,
    SuiteType,
    run_report,
)
from neobank_e2e.cli.utils import console, display_records, display_run_summary
from neobank_e2e.data.random_generator import BankingDataGenerator

pass_context = click.make_pass_decorator(CLIContext, ensure=True)

DATA_KINDS = ("account", "beneficiary", "deposit", "debit", "transaction", "credentials")


@click.group()
@click.option('--config', default=None, help='Suite configuration file (YAML)')
@click.option('--debug/--no-debug', default=False, help='Enable debug logging')
@pass_context
def cli(ctx: CLIContext, config: Optional[str], debug: bool):
    """NeoBank end-to-end test suite."""
    if config:
        ctx.config_file = config

    ctx.debug = debug
    setup_logging(debug)


@cli.command()
@click.argument('suite', type=click.Choice([s.value for s in SuiteType]), default=SuiteType.ALL.value)
@click.option('--path', 'paths', multiple=True, help='Specific test file or node id (repeatable)')
@click.option('--markers', default=None, help='pytest marker expression')
@click.option('--base-url', default=None, help='Base URL of a deployed NeoBank UI')
@click.option('--browser', type=click.Choice(['chromium', 'firefox', 'webkit']), default=None, help='Browser engine')
@click.option('--headed', is_flag=True, help='Show the browser window')
@click.option('--parallel', is_flag=True, help='Run with pytest-xdist (-n auto)')
@click.option('--fail-fast', is_flag=True, help='Stop on first failure')
@click.option('--verbose', '-v', is_flag=True, help='Verbose pytest output')
@click.option('--no-allure', is_flag=True, help='Do not write allure results')
@pass_context
def run(ctx: CLIContext, suite: str, paths: Tuple[str, ...], markers: Optional[str], base_url: Optional[str],
        browser: Optional[str], headed: bool, parallel: bool, fail_fast: bool, verbose: bool, no_allure: bool):
    """Run a test suite through pytest."""
    config = RunConfig(
        suite=SuiteType(suite),
        paths=list(paths) or None,
        markers=markers,
        base_url=base_url,
        browser=browser or ctx.settings.browser,
        headed=headed,
        parallel=parallel,
        fail_fast=fail_fast,
        verbose=verbose,
        debug=ctx.debug,
        alluredir=None if no_allure else ALLURE_RESULTS_DIR,
    )
    runner = SuiteRunner(config)

    console.print(f"[bold]Running {suite} suite[/bold]")
    success = runner.run()
    display_run_summary(runner.results)

    if success:
        console.print("[green]✓ All selected tests passed[/green]")
    else:
        console.print("[red]✗ Test run failed[/red]")
        sys.exit(1)


@cli.command()
def suites():
    """List the selectable suites."""
    rows = [
        {
            "suite": suite.value,
            "description": SUITE_DESCRIPTIONS[suite],
            "pytest_args": " ".join(SUITE_ARGS[suite]),
        }
        for suite in SuiteType
    ]
    display_records("Suites", rows)


@cli.group()
def report():
    """Allure report commands."""


def _run_report(action: str, results_dir: str, output_dir: str = ALLURE_REPORT_DIR):
    try:
        returncode = run_report(action, results_dir, output_dir)
    except ReportToolMissing as e:
        raise click.ClickException(str(e))
    if returncode != 0:
        sys.exit(returncode)


@report.command()
@click.option('--results', default=ALLURE_RESULTS_DIR, help='allure-pytest results directory')
def serve(results: str):
    """Serve the allure report in a browser."""
    _run_report("serve", results)


@report.command()
@click.option('--results', default=ALLURE_RESULTS_DIR, help='allure-pytest results directory')
@click.option('--output', default=ALLURE_REPORT_DIR, help='Static report output directory')
def generate(results: str, output: str):
    """Generate a static allure report."""
    _run_report("generate", results, output)
    console.print(f"[green]✓ Report written to {output}[/green]")


@cli.command()
@click.argument('kind', type=click.Choice(DATA_KINDS))
@click.option('--count', default=3, show_default=True, type=click.IntRange(min=1), help='Number of records')
@click.option('--seed', default=None, type=int, help='Seed for reproducible output')
@click.option('--locale', default='en_US', show_default=True, help='Faker locale')
def data(kind: str, count: int, seed: Optional[int], locale: str):
    """Print generated banking test data."""
    generator = BankingDataGenerator(locale=locale, seed=seed)

    if kind == "account":
        rows = [
            {
                "account_number": generator.generate_account_number(),
                "account_name": generator.generate_account_name(),
                "branch": generator.generate_branch_name(),
                "currency": generator.generate_currency_code(),
            }
            for _ in range(count)
        ]
    elif kind == "beneficiary":
        rows = [b.model_dump() for b in generator.generate_multiple_beneficiaries(count)]
    elif kind == "deposit":
        rows = [{"amount": f"{generator.generate_deposit_amount():.2f}"} for _ in range(count)]
    elif kind == "debit":
        rows = [{"amount": f"{generator.generate_debit_amount():.2f}"} for _ in range(count)]
    elif kind == "transaction":
        rows = [
            {
                "transaction_id": generator.generate_transaction_id(),
                "description": generator.generate_transaction_description(),
                "amount": f"{generator.generate_amount():.2f}",
            }
            for _ in range(count)
        ]
    else:
        rows = [
            {"username": generator.generate_username(), "password": generator.generate_password()}
            for _ in range(count)
        ]

    display_records(f"Generated {kind} data", rows)


if __name__ == '__main__':
    cli()
