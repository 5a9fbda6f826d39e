"""
Glue between the execution profile and pytest.

The live suite is an ordinary pytest session; this module only decides
which arguments that session gets (workers, retries, report, selection)
and how focused tests are treated.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest

from .config import ExecutionProfile

LIVE_MARKER = "live"
FOCUS_MARKER = "only"


def build_pytest_args(
    profile: ExecutionProfile,
    tests_dir: Path = Path("tests"),
    grep: Optional[str] = None,
    html_report: Optional[Path] = None,
    extra: Sequence[str] = ()
) -> List[str]:
    """
    Build the pytest command line for a live run.

    Args:
        profile: Local or CI profile (workers, retries)
        tests_dir: Directory holding the live suite
        grep: ``-k`` expression selecting scenarios by id or test name
        html_report: Where to write the self-contained HTML report
        extra: Arguments passed through to pytest unchanged

    Returns:
        Argument list for ``pytest.main``
    """
    args = [str(tests_dir), "-m", LIVE_MARKER, "-v"]

    if grep:
        args += ["-k", grep]

    if profile.parallel:
        args += ["-n", str(profile.workers)]

    if profile.retries:
        args += ["--reruns", str(profile.retries)]

    if html_report is not None:
        args += [f"--html={html_report}", "--self-contained-html"]

    args.extend(extra)
    return args


def split_focused(items: Sequence) -> Tuple[list, list]:
    """
    Partition collected items by the ``only`` marker.

    Returns:
        (selected, deselected). Without focused items everything is
        selected.
    """
    focused = [item for item in items if item.get_closest_marker(FOCUS_MARKER) is not None]
    if not focused:
        return list(items), []
    return focused, [item for item in items if item.get_closest_marker(FOCUS_MARKER) is None]


def apply_focus(items: Sequence, forbid_only: bool) -> Tuple[list, list]:
    """
    Apply the focus rules of the active profile.

    Raises:
        pytest.UsageError: focused tests were collected while forbidden
    """
    selected, deselected = split_focused(items)
    if deselected and forbid_only:
        names = ", ".join(item.nodeid for item in selected)
        raise pytest.UsageError(
            f"Focused tests are not allowed in the CI profile: {names}"
        )
    return selected, deselected
