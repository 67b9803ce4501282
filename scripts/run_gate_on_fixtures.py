#!/usr/bin/env python3
"""
Run the quality gate (validate + auto-fix) on the HTML test fixtures.
This script is for testing only; it doesn't modify repository files.
"""
import logging
from pathlib import Path

# Adjust path so imports resolve when running from project root
ROOT = Path(__file__).resolve().parents[1]
import sys
sys.path.insert(0, str(ROOT))

from codegate import auto_fix_code, validate_all

FIXTURES_DIR = ROOT / "tests" / "fixtures"

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("run_gate")


def run_one(path: Path):
    html = path.read_text(encoding="utf-8")

    logger.info(f"Validating {path.name}")
    validation = validate_all(html)
    fix = auto_fix_code(html, validation)
    revalidation = validate_all(fix.fixed)

    logger.info(
        f"Fixture {path.name}: passed={validation.passed}, "
        f"score={validation.score} ({validation.grade}) -> "
        f"{revalidation.score} ({revalidation.grade}) after fixes"
    )
    for entry in fix.applied_fixes:
        logger.info(f"  fixed: {entry}")
    logger.info(f"  remaining issues: {fix.remaining_issues}")
    for issue in revalidation.issues:
        logger.info(f"    {issue.describe()}")
    return validation, fix


def main():
    results = []
    for path in sorted(FIXTURES_DIR.glob("*.html")):
        try:
            results.append((path.name, run_one(path)))
        except Exception as e:
            logger.exception(f"Failed on {path.name}: {e}")
    return results


if __name__ == '__main__':
    main()
