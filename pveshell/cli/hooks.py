"""Hook scripts run for each VM/CT a command processes."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from pveshell.models import VmResource

logger = logging.getLogger(__name__)

ENV_PREFIX = "PVESHELL_"


def hook_environment(vm: VmResource, phase: str, dry_run: bool) -> dict[str, str]:
    """Environment passed to the hook: the caller's plus the VM/CT details."""
    env = dict(os.environ)
    env.update(
        {
            f"{ENV_PREFIX}PHASE": phase,
            f"{ENV_PREFIX}VMID": str(vm.vm_id),
            f"{ENV_PREFIX}VMNAME": vm.name,
            f"{ENV_PREFIX}VMNODE": vm.node,
            f"{ENV_PREFIX}VMTYPE": vm.type,
            f"{ENV_PREFIX}DRY_RUN": "1" if dry_run else "0",
        }
    )
    return env


def run_hook(script: Path, vm: VmResource, phase: str, *, dry_run: bool = False) -> int | None:
    """Run ``script <phase>`` for one VM/CT.

    Returns:
        The script's exit code, or None when ``dry_run`` skipped it.
    """
    if dry_run:
        logger.info("Dry run: skipping hook %s (%s) for %s", script, phase, vm.vm_id)
        return None

    logger.debug("Running hook %s (%s) for %s", script, phase, vm.vm_id)
    completed = subprocess.run(
        [str(script), phase],
        env=hook_environment(vm, phase, dry_run),
        check=False,
    )
    if completed.returncode != 0:
        logger.warning("Hook %s exited with %s for %s", script, completed.returncode, vm.vm_id)
    return completed.returncode
