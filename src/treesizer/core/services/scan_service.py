from __future__ import annotations

"""
Scan Orchestration Service.

Turns a validated configuration into a traversal: resolves the root path
and hidden predicate, runs the tree builder against a filesystem port and
optionally persists the diagnostics report.
"""

import logging
import os
import threading
from typing import Any, Dict, List, Optional

from treesizer.core.hidden import get_hidden_predicate
from treesizer.core.ports import FileSystemPort
from treesizer.core.services.tree_builder import scan_tree
from treesizer.core.services.validator import validate_config
from treesizer.domain.scan_models import ScanDiagnostic, ScanResult
from treesizer.infra.fs import LocalFileSystem, normalize_path, safe_mkdir
from treesizer.infra.logging import LoggingConfig, configure_logging

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def run_scan(
        config: Dict[str, Any],
        port: Optional[FileSystemPort] = None,
        cancel: Optional[threading.Event] = None,
) -> ScanResult:
    """
    Execute a scan described by a configuration dictionary.

    Args:
        config: Raw configuration; validated (non-strict) before use.
        port: Filesystem access; defaults to LocalFileSystem.
        cancel: Optional event that stops descending once set.

    Returns:
        ScanResult: Tree and diagnostics. Diagnostics are emptied when
                    collect_diagnostics is disabled.
    """
    clean, warnings = validate_config(config)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    root = normalize_path(clean["root_path"], fallback=os.getcwd())
    result = scan_tree(
        root,
        port or LocalFileSystem(),
        is_hidden=get_hidden_predicate(clean["hidden_detection"]),
        cancel=cancel,
        max_workers=clean["max_workers"],
    )

    if not clean["collect_diagnostics"]:
        return ScanResult(root=result.root, diagnostics=[], cancelled=result.cancelled)

    if clean["diagnostics_path"]:
        write_diagnostics_report(clean["diagnostics_path"], result.diagnostics)

    return result


def setup_logging(config: Dict[str, Any], *, force: bool = False) -> logging.Logger:
    """Configure root logging from the log_level and log_file settings."""
    clean, _ = validate_config(config)
    cfg = LoggingConfig(
        level=clean["log_level"],
        console=True,
        log_file=clean["log_file"] or None,
    )
    return configure_logging(cfg, force=force)


def write_diagnostics_report(report_path: str, diagnostics: List[ScanDiagnostic]) -> str:
    """
    Persist recovered scan failures to a text report.

    With no diagnostics nothing is written, and a report left at report_path
    by an earlier scan is removed so it cannot be mistaken for this one.

    Args:
        report_path: Target filesystem path for the report.
        diagnostics: Failures collected during the scan.

    Returns:
        str: The path to the written report, or an empty string if not saved.
    """
    if not diagnostics:
        _remove_stale_report(report_path)
        return ""

    ok, err = safe_mkdir(os.path.dirname(os.path.abspath(report_path)))
    if not ok:
        logger.error(f"Failed to create report directory for '{report_path}': {err}")
        return ""

    try:
        with open(report_path, "w", encoding="utf-8") as f:
            f.write("SCAN DIAGNOSTICS REPORT:\n")
            f.write("=" * 80 + "\n")
            for item in diagnostics:
                f.write(f"PATH: {item.path}\n")
                f.write(f"OPERATION: {item.operation}\n")
                f.write(f"ERROR: {item.error}\n")
                f.write("-" * 80 + "\n")
    except OSError as e:
        logger.error(f"Failed to persist diagnostics report to '{report_path}': {e}")
        return ""

    logger.info(f"Diagnostics report saved to: {report_path}")
    return report_path


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _remove_stale_report(report_path: str) -> None:
    if not os.path.isfile(report_path):
        return
    try:
        os.remove(report_path)
    except OSError as e:
        logger.error(f"Failed to remove stale diagnostics report '{report_path}': {e}")
        return
    logger.info(f"Removed stale diagnostics report: {report_path}")
