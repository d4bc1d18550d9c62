"""
Suite runner.

Builds and executes the pytest command for a suite selection and wraps the
allure CLI for report serving and generation. The runner only assembles
commands; test execution, retries and reporting belong to pytest and allure.
"""

import logging
import re
import shutil
import subprocess
import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
ALLURE_RESULTS_DIR = "allure-results"
ALLURE_REPORT_DIR = "allure-report"


class SuiteType(Enum):
    """Selectable suites."""
    ALL = "all"
    UNIT = "unit"
    UI = "ui"
    AUTH = "auth"
    TRANSACTIONS = "transactions"
    ADVANCED = "advanced"
    CRUD = "crud"
    RANDOM = "random"
    COVERAGE = "coverage"


SUITE_ARGS: Dict[SuiteType, List[str]] = {
    SuiteType.ALL: ["tests/"],
    SuiteType.UNIT: ["tests/", "-m", "not ui"],
    SuiteType.UI: ["tests/ui/"],
    SuiteType.AUTH: ["tests/ui/", "-m", "auth"],
    SuiteType.TRANSACTIONS: ["tests/ui/", "-m", "transactions"],
    SuiteType.ADVANCED: ["tests/ui/", "-m", "advanced"],
    SuiteType.CRUD: ["tests/ui/", "-m", "crud"],
    SuiteType.RANDOM: ["tests/", "-m", "random"],
    SuiteType.COVERAGE: ["tests/", "--cov=neobank_e2e"],
}

SUITE_DESCRIPTIONS: Dict[SuiteType, str] = {
    SuiteType.ALL: "Every unit test and UI scenario",
    SuiteType.UNIT: "Browserless tests only",
    SuiteType.UI: "All browser scenarios",
    SuiteType.AUTH: "Login and logout scenarios",
    SuiteType.TRANSACTIONS: "Single deposit, debit and balance scenarios",
    SuiteType.ADVANCED: "Multi-step and boundary transaction scenarios",
    SuiteType.CRUD: "Beneficiary create/read/update/delete scenarios",
    SuiteType.RANDOM: "Scenarios and checks driven by generated data",
    SuiteType.COVERAGE: "Every test with a coverage report",
}


class ReportToolMissing(RuntimeError):
    """The allure command line tool is not on PATH."""


@dataclass
class RunConfig:
    """Suite execution configuration."""
    suite: SuiteType = SuiteType.ALL
    paths: Optional[List[str]] = None
    markers: Optional[str] = None
    base_url: Optional[str] = None
    browser: Optional[str] = None
    headed: bool = False
    parallel: bool = False
    fail_fast: bool = False
    verbose: bool = False
    debug: bool = False
    alluredir: Optional[str] = ALLURE_RESULTS_DIR
    extra_args: List[str] = field(default_factory=list)


class SuiteRunner:
    """Builds and runs pytest for a RunConfig."""

    def __init__(self, config: RunConfig, python: Optional[str] = None):
        self.config = config
        self.python = python or sys.executable
        self.results: Dict[str, dict] = {}
        self._plugins: Dict[str, bool] = {}

    def plugin_installed(self, module: str) -> bool:
        """Whether the target interpreter can import a pytest plugin module; cached per runner."""
        if module not in self._plugins:
            try:
                result = subprocess.run([self.python, "-c", f"import {module}"], capture_output=True, check=False)
                self._plugins[module] = result.returncode == 0
            except OSError as e:
                logger.warning(f"Could not check for {module} with {self.python}: {e}")
                self._plugins[module] = False
        return self._plugins[module]

    def build_pytest_command(self) -> List[str]:
        """Build the pytest command line for the configuration."""
        cmd = [self.python, "-m", "pytest"]

        if self.config.paths:
            # Explicit files replace the suite's default selection.
            cmd.extend(self.config.paths)
        else:
            suite_args = SUITE_ARGS[self.config.suite]
            if self.config.suite is SuiteType.COVERAGE and not self.plugin_installed("pytest_cov"):
                logger.warning("Coverage requires pytest-cov. Install with: pip install pytest-cov")
                suite_args = [arg for arg in suite_args if not arg.startswith("--cov")]
            cmd.extend(suite_args)

        if self.config.markers:
            cmd.extend(["-m", self.config.markers])

        if self.config.base_url:
            cmd.extend(["--base-url", self.config.base_url])
        if self.config.browser:
            cmd.extend(["--browser", self.config.browser])
        if self.config.headed:
            cmd.append("--headed")

        if self.config.parallel:
            if self.plugin_installed("xdist"):
                cmd.extend(["-n", "auto"])
            else:
                logger.warning("Parallel execution requires pytest-xdist. Install with: pip install pytest-xdist")

        cmd.append("-v" if self.config.verbose else "-q")

        if self.config.debug:
            cmd.extend(["--tb=long", "-s"])
        else:
            cmd.append("--tb=short")

        if self.config.fail_fast:
            cmd.extend(["-x", "--maxfail=1"])

        if self.config.alluredir:
            if self.plugin_installed("allure_pytest"):
                cmd.append(f"--alluredir={self.config.alluredir}")
            else:
                logger.warning("Allure results need allure-pytest; running without --alluredir")

        cmd.extend(self.config.extra_args)
        return cmd

    def run(self) -> bool:
        """Run pytest, record a summary in self.results, and return overall success."""
        cmd = self.build_pytest_command()
        logger.info(f"Executing pytest: {' '.join(cmd)}")
        start = time.time()

        try:
            result = subprocess.run(cmd, cwd=PROJECT_ROOT, capture_output=True, text=True)
        except KeyboardInterrupt:
            logger.info("Pytest execution interrupted by user")
            return False

        sys.stdout.write(result.stdout)
        sys.stderr.write(result.stderr)

        summary = self._parse_pytest_output(result.stdout)
        success = result.returncode == 0
        self.results[self.config.suite.value] = {
            "success": success,
            "returncode": result.returncode,
            "duration": time.time() - start,
            **summary,
        }
        return success

    @staticmethod
    def _parse_pytest_output(output: str) -> Dict[str, int]:
        """Counts from pytest's final summary line, e.g. '= 1 failed, 20 passed, 3 skipped in 4.5s ='."""
        counts = {"total": 0, "passed": 0, "failed": 0, "skipped": 0, "errors": 0}
        lines = [line for line in output.splitlines() if re.search(r"\d+ (passed|failed|skipped|errors?)\b", line)]
        if not lines:
            return counts

        summary = lines[-1]
        keys = {"passed": "passed", "failed": "failed", "skipped": "skipped", "error": "errors", "errors": "errors"}
        for number, word in re.findall(r"(\d+) (passed|failed|skipped|errors?)\b", summary):
            counts[keys[word]] += int(number)
        counts["total"] = counts["passed"] + counts["failed"] + counts["skipped"] + counts["errors"]
        return counts


def build_report_command(action: str, results_dir: str = ALLURE_RESULTS_DIR, output_dir: str = ALLURE_REPORT_DIR) -> List[str]:
    """
    Allure CLI command for serving or generating the report.

    Args:
        action: "serve" for an interactive report, "generate" for a static one
        results_dir: Directory written by allure-pytest
        output_dir: Target directory for the static report

    Raises:
        ValueError: For an unknown action
        ReportToolMissing: If allure is not installed
    """
    allure = shutil.which("allure")
    if allure is None:
        raise ReportToolMissing("allure command not found; install the Allure CLI to build reports")

    if action == "serve":
        return [allure, "serve", results_dir]
    if action == "generate":
        return [allure, "generate", results_dir, "-o", output_dir, "--clean"]
    raise ValueError(f"Unknown report action: {action}")


def run_report(action: str, results_dir: str = ALLURE_RESULTS_DIR, output_dir: str = ALLURE_REPORT_DIR) -> int:
    """Run the allure CLI and return its exit code."""
    if not Path(results_dir).exists():
        logger.warning(f"No results in {results_dir}; run the suite first")
    cmd = build_report_command(action, results_dir, output_dir)
    logger.info(f"Executing: {' '.join(cmd)}")
    return subprocess.run(cmd, cwd=PROJECT_ROOT).returncode
